from src.timesheet_payroll.timesheet_payroll.locations.model import (
    NOT_INFORMED,
    AddressOnlyLocation,
    CoordinatesLocation,
    FullAddressLocation,
    find_location_field,
    location_to_dict,
    normalize_location_details,
)


def test_coordinates_format():
    loc = normalize_location_details({"lat": -23.55, "lng": -46.63})
    assert isinstance(loc, CoordinatesLocation)
    assert loc.address is None
    assert loc.full_address == "Coordinates: -23.55, -46.63"


def test_full_address_format_accepts_camel_case_keys():
    loc = normalize_location_details(
        {
            "lat": "-23.5",
            "lng": "-46.6",
            "street": "Av. Paulista",
            "houseNumber": "1000",
            "city": "Sao Paulo",
            "postalCode": "01310-100",
            "fullAddress": "Av. Paulista, 1000 - Sao Paulo",
        }
    )
    assert isinstance(loc, FullAddressLocation)
    assert loc.lat == -23.5
    assert loc.house_number == "1000"
    assert loc.postal_code == "01310-100"
    assert loc.neighborhood == NOT_INFORMED
    assert loc.full_address == "Av. Paulista, 1000 - Sao Paulo"


def test_address_only_formats():
    assert normalize_location_details("Rua A, 10") == AddressOnlyLocation(address="Rua A, 10")
    loc = normalize_location_details({"address": "Rua B", "latitude": 1.5, "longitude": 2.5})
    assert isinstance(loc, AddressOnlyLocation)
    assert (loc.lat, loc.lng) == (1.5, 2.5)


def test_unknown_shapes_give_none():
    assert normalize_location_details(None) is None
    assert normalize_location_details("   ") is None
    assert normalize_location_details({"foo": "bar"}) is None
    assert normalize_location_details(42) is None


def test_normalizing_a_variant_returns_it_unchanged():
    loc = CoordinatesLocation(lat=1.0, lng=2.0, address="Somewhere")
    assert normalize_location_details(loc) is loc


def test_location_to_dict_keeps_the_kind_tag():
    assert location_to_dict(CoordinatesLocation(lat=1.0, lng=2.0)) == {
        "lat": 1.0,
        "lng": 2.0,
        "address": None,
        "kind": "coordinates",
    }
    assert location_to_dict(None) is None


def test_find_location_field_accepts_both_spellings():
    locations = {"clockIn": {"lat": 1, "lng": 2}, "lunch_start": "Office"}

    assert isinstance(find_location_field(locations, "clock_in"), CoordinatesLocation)
    assert find_location_field(locations, "lunchStart") == AddressOnlyLocation(address="Office")
    assert find_location_field(locations, "clock_out") is None
    assert find_location_field(None, "clock_in") is None
