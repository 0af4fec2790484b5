from wkformat.exif import (
    ExifBuilder,
    ExifData,
    ExifTag,
    ExifValue,
    ExifValueKind,
)


def test_builder_camera_fields():
    exif = ExifBuilder().make("Canon").model("EOS R5").iso(800).aperture(2.8).build()
    assert exif.camera_make() == "Canon"
    assert exif.camera_model() == "EOS R5"
    assert exif.iso() == 800
    assert exif.aperture() == 2.8


def test_builder_from_classmethod():
    exif = ExifData.builder().software("WK Image Format v3.1.1").build()
    assert exif.get(ExifTag.SOFTWARE).as_string() == "WK Image Format v3.1.1"


def test_missing_fields_are_none():
    exif = ExifData()
    assert exif.camera_make() is None
    assert exif.iso() is None
    assert exif.gps_coordinates() is None
    assert exif.orientation() is None


def test_gps_needs_both_coordinates():
    exif = ExifBuilder().gps(51.5, -0.12).build()
    assert exif.gps_coordinates() == (51.5, -0.12)
    del exif.tags[ExifTag.GPS_LONGITUDE]
    assert exif.gps_coordinates() is None


def test_other_builder_fields():
    exif = (
        ExifBuilder()
        .date_time("2024:01:01 10:00:00")
        .focal_length(50.0)
        .exposure(0.01)
        .orientation(6)
        .artist("Someone")
        .copyright("Someone")
        .description("desc")
        .build()
    )
    assert exif.date_time() == "2024:01:01 10:00:00"
    assert exif.focal_length() == 50.0
    assert exif.exposure_time() == 0.01
    assert exif.orientation() == 6
    assert exif.get(ExifTag.IMAGE_DESCRIPTION).as_string() == "desc"


def test_rational_as_float():
    exif = ExifData()
    exif.set_rational(ExifTag.EXPOSURE_TIME, 1, 4)
    assert exif.exposure_time() == 0.25
    exif.set_rational(ExifTag.EXPOSURE_TIME, 1, 0)
    assert exif.exposure_time() is None


def test_srational_as_float():
    value = ExifValue(ExifValueKind.SRATIONAL, (-1, 2))
    assert value.as_float() == -0.5


def test_value_conversions_by_kind():
    text = ExifValue(ExifValueKind.STRING, "x")
    assert text.as_int() is None
    assert text.as_float() is None
    number = ExifValue(ExifValueKind.INT, 5)
    assert number.as_string() is None
    assert number.as_int() == 5
    unsigned = ExifValue(ExifValueKind.UINT, 5)
    assert unsigned.as_int() == 5


def test_uint_wraps_to_signed():
    value = ExifValue(ExifValueKind.UINT, (1 << 64) - 1)
    assert value.as_int() == -1


def test_set_replaces_value():
    exif = ExifData()
    exif.set_string(ExifTag.MAKE, "A")
    exif.set_string(ExifTag.MAKE, "B")
    assert exif.camera_make() == "B"
    assert len(exif.tags) == 1


def test_iso_stored_as_float_is_not_int():
    exif = ExifData()
    exif.set_float(ExifTag.ISO_SPEED_RATINGS, 100.0)
    assert exif.iso() is None