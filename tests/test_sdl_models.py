"""SDL wire records: verify() ordering and transfigure() flattening.

Tests:
    - Location reports the first missing field, in link/service/region order
    - File requires name and type, allows zero locations, rejects two or more
    - Accession checks requested -> status -> files -> duplicate -> files valid
    - Envelope checks version before emptiness
"""

import pytest

from adapters.sdl import SdlAccession, SdlFile, SdlLocation, SdlResponse
from core.errors import (
    DuplicateAccessionError,
    EmptyFilesError,
    EmptyResultError,
    MissingFieldError,
    MultipleLocationsError,
    StatusError,
    UnrequestedAccessionError,
    VersionMismatchError,
)


# ─── Location ───────────────────────────────────────────────────

def test_location_valid(sdl_location):
    SdlLocation.model_validate(sdl_location()).verify()


@pytest.mark.parametrize("field", ["link", "service", "region"])
def test_location_missing_field(sdl_location, field):
    location = SdlLocation.model_validate(sdl_location(**{field: ""}))
    with pytest.raises(MissingFieldError) as exc_info:
        location.verify()
    assert exc_info.value.field == field
    assert exc_info.value.record == "location"


def test_location_reports_first_missing_field_only(sdl_location):
    location = SdlLocation.model_validate(sdl_location(link="", service="", region=""))
    with pytest.raises(MissingFieldError) as exc_info:
        location.verify()
    assert exc_info.value.field == "link"


def test_location_null_fields_are_missing(sdl_location):
    location = SdlLocation.model_validate(sdl_location(service=None))
    with pytest.raises(MissingFieldError) as exc_info:
        location.verify()
    assert exc_info.value.field == "service"


# ─── File ───────────────────────────────────────────────────────

def test_file_without_name(sdl_file):
    with pytest.raises(MissingFieldError) as exc_info:
        SdlFile.model_validate(sdl_file(name="")).verify()
    assert exc_info.value.field == "name"


def test_file_without_type(sdl_file):
    with pytest.raises(MissingFieldError) as exc_info:
        SdlFile.model_validate(sdl_file(type="")).verify()
    assert exc_info.value.field == "type"
    assert exc_info.value.owner == "a.bam"


def test_file_with_two_locations_is_rejected(sdl_file, sdl_location):
    file = SdlFile.model_validate(sdl_file(locations=[sdl_location(), sdl_location(region="us-west-2")]))
    with pytest.raises(MultipleLocationsError) as exc_info:
        file.verify()
    assert exc_info.value.count == 2
    assert exc_info.value.file_name == "a.bam"


def test_file_cascades_to_location(sdl_file, sdl_location):
    file = SdlFile.model_validate(sdl_file(locations=[sdl_location(region="")]))
    with pytest.raises(MissingFieldError) as exc_info:
        file.verify()
    assert exc_info.value.record == "location"
    assert exc_info.value.field == "region"


def test_file_without_locations_is_valid_and_has_no_link(sdl_file):
    file = SdlFile.model_validate(sdl_file(locations=[]))
    file.verify()

    domain = file.transfigure()
    assert domain.link == ""
    assert domain.service == ""
    assert domain.region == ""
    assert not domain.has_location


def test_file_with_missing_locations_key_is_valid(sdl_file):
    payload = sdl_file()
    del payload["locations"]
    file = SdlFile.model_validate(payload)
    file.verify()
    assert file.locations == []


def test_file_transfigure_flattens_location(sdl_file):
    domain = SdlFile.model_validate(sdl_file()).transfigure()
    assert domain.name == "a.bam"
    assert domain.type == "bam"
    assert domain.size == 1024
    assert domain.md5_hash == "d41d8cd98f00b204e9800998ecf8427e"
    assert domain.modified_date is not None
    assert domain.modified_date.year == 2018
    assert domain.link == "https://sra-pub.s3.amazonaws.com/SRR000001/a.bam"
    assert domain.service == "s3"
    assert domain.region == "us-east-1"


# ─── Accession ──────────────────────────────────────────────────

def test_accession_valid_marks_seen(sdl_accession):
    seen: set[str] = set()
    SdlAccession.model_validate(sdl_accession()).verify({"SRR000001"}, seen)
    assert seen == {"SRR000001"}


def test_accession_not_requested(sdl_accession):
    seen: set[str] = set()
    record = SdlAccession.model_validate(sdl_accession(bundle="SRR999999"))
    with pytest.raises(UnrequestedAccessionError) as exc_info:
        record.verify({"SRR000001"}, seen)
    assert exc_info.value.accession_id == "SRR999999"
    assert seen == set()


def test_unrequested_is_checked_before_status(sdl_accession):
    record = SdlAccession.model_validate(sdl_accession(bundle="SRR999999", status=404))
    with pytest.raises(UnrequestedAccessionError):
        record.verify({"SRR000001"}, set())


def test_accession_bad_status_carries_message(sdl_accession):
    record = SdlAccession.model_validate(sdl_accession(status=404, msg="accession not found"))
    with pytest.raises(StatusError) as exc_info:
        record.verify({"SRR000001"}, set())
    assert exc_info.value.status == 404
    assert exc_info.value.reason == "accession not found"
    assert "accession not found" in str(exc_info.value)


def test_accession_without_files(sdl_accession):
    record = SdlAccession.model_validate(sdl_accession(files=[]))
    with pytest.raises(EmptyFilesError):
        record.verify({"SRR000001"}, set())


def test_accession_duplicate_in_same_batch(sdl_accession):
    seen: set[str] = set()
    record = SdlAccession.model_validate(sdl_accession())
    record.verify({"SRR000001"}, seen)
    with pytest.raises(DuplicateAccessionError) as exc_info:
        record.verify({"SRR000001"}, seen)
    assert exc_info.value.accession_id == "SRR000001"


def test_accession_same_id_valid_again_with_fresh_seen_set(sdl_accession):
    record = SdlAccession.model_validate(sdl_accession())
    record.verify({"SRR000001"}, set())
    record.verify({"SRR000001"}, set())


def test_accession_stops_at_first_invalid_file(sdl_accession, sdl_file):
    record = SdlAccession.model_validate(
        sdl_accession(files=[sdl_file(name="b.bam", type=""), sdl_file(name="")])
    )
    with pytest.raises(MissingFieldError) as exc_info:
        record.verify({"SRR000001"}, set())
    assert exc_info.value.field == "type"


def test_accession_transfigure_keys_files_by_name(sdl_accession, sdl_file):
    record = SdlAccession.model_validate(
        sdl_accession(files=[sdl_file(name="a.bam"), sdl_file(name="a.bam.bai", type="bai", locations=[])])
    )
    accession = record.transfigure()
    assert accession.id == "SRR000001"
    assert set(accession.files) == {"a.bam", "a.bam.bai"}
    assert accession.files["a.bam.bai"].link == ""


def test_accession_transfigure_last_duplicate_name_wins(sdl_accession, sdl_file):
    record = SdlAccession.model_validate(
        sdl_accession(files=[sdl_file(size=1), sdl_file(size=2)])
    )
    assert record.transfigure().files["a.bam"].size == 2


# ─── Envelope ───────────────────────────────────────────────────

def test_envelope_version_mismatch(sdl_payload):
    envelope = SdlResponse.model_validate(sdl_payload(version="1"))
    with pytest.raises(VersionMismatchError) as exc_info:
        envelope.verify("2")
    assert exc_info.value.expected == "2"
    assert exc_info.value.actual == "1"


def test_envelope_version_checked_before_emptiness():
    envelope = SdlResponse.model_validate({"version": "1", "result": []})
    with pytest.raises(VersionMismatchError):
        envelope.verify("2")


def test_envelope_empty_result():
    envelope = SdlResponse.model_validate({"version": "2", "result": []})
    with pytest.raises(EmptyResultError):
        envelope.verify("2")


def test_envelope_does_not_recurse_into_accessions(sdl_payload, sdl_accession):
    envelope = SdlResponse.model_validate(sdl_payload(sdl_accession(status=500)))
    envelope.verify("2")
