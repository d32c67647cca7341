from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import DEFAULT_GPS_ACCURACY_METERS
from .geofence import check_location

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/locations/reverse", methods=["GET"], endpoint="reverse_geocode")
    def reverse_geocode():
        try:
            latitude = float(request.args.get("lat", ""))
            longitude = float(request.args.get("lng", ""))
        except ValueError:
            return jsonify({"success": False, "message": "lat and lng must be numbers"}), 400

        result = container.geocoder.reverse(latitude, longitude)
        return jsonify({"success": result.success, "address": result.address}), 200

    @app.route("/api/locations/check", methods=["GET"], endpoint="check_location")
    def check_punch_location():
        try:
            latitude = float(request.args.get("lat", ""))
            longitude = float(request.args.get("lng", ""))
            accuracy = float(request.args.get("accuracy") or DEFAULT_GPS_ACCURACY_METERS)
        except ValueError:
            return jsonify({"success": False, "message": "lat, lng and accuracy must be numbers"}), 400

        try:
            allowed_locations = container.allowed_locations_repo.list_active()
        except Exception:
            logger.exception("Loading allowed locations failed")
            return jsonify({"success": False, "message": "Unexpected error while checking the location"}), 500

        check = check_location(latitude, longitude, allowed_locations, gps_accuracy=accuracy)
        return jsonify(
            {
                "success": True,
                "allowed": check.allowed,
                "message": check.message,
                "location": check.location.name if check.location else None,
                "distance_meters": round(check.distance_meters, 1) if check.distance_meters is not None else None,
                "range_meters": check.range_meters,
            }
        ), 200
