"""Locality resolution: AWS first, GCP second, combined failure.

Tests:
    - AWS wins without touching GCP
    - GCP is tried only after AWS fails; it needs both the identity token and the zone
    - A zone of one character or less fails detection
    - Both failing raises DetectionError with each cause available on its own
    - A forced location never issues a request
"""

import pytest

from adapters.locators import AwsLocator, GcpLocator, ManualLocator
from core.errors import DetectionError, ProbeError
from core.services.locality_resolver import generate_locator, resolve, traditional_location
from tests.metadata_fakes import AWS_HOST, GCP_TOKEN_HOST, GCP_ZONE_HOST, GCP_ZONE_PATH


def test_resolve_prefers_aws(metadata_server, settings):
    metadata_server.on_aws("us-east-1")
    metadata_server.on_gcp()

    locator = resolve(settings, transport=metadata_server.transport)

    assert isinstance(locator, AwsLocator)
    assert metadata_server.hosts() == [AWS_HOST]


def test_resolve_falls_back_to_gcp(metadata_server, settings):
    metadata_server.on_gcp()

    locator = resolve(settings, transport=metadata_server.transport)

    assert isinstance(locator, GcpLocator)
    assert metadata_server.hosts() == [AWS_HOST, GCP_TOKEN_HOST, GCP_ZONE_HOST]
    assert locator.region() == "us-central1-a"


def test_resolve_gcp_without_token_fails_detection(metadata_server, settings):
    metadata_server.add(GCP_ZONE_HOST, GCP_ZONE_PATH, json="projects/9/zones/asia-east1-c")

    with pytest.raises(DetectionError) as exc_info:
        resolve(settings, transport=metadata_server.transport)

    assert exc_info.value.gcp_cause.provider == "gcp"
    assert GCP_ZONE_HOST not in metadata_server.hosts()


@pytest.mark.parametrize("zone", ["projects/1/zones/a", ""])
def test_resolve_gcp_short_zone_fails_detection(metadata_server, settings, zone):
    metadata_server.on_gcp(zone=zone)

    with pytest.raises(DetectionError) as exc_info:
        resolve(settings, transport=metadata_server.transport)

    gcp_cause = exc_info.value.gcp_cause
    assert isinstance(gcp_cause, ProbeError)
    assert gcp_cause.provider == "gcp"
    assert "empty region" in str(gcp_cause)


def test_resolve_off_cloud_reports_both_causes(metadata_server, settings):
    with pytest.raises(DetectionError) as exc_info:
        resolve(settings, transport=metadata_server.transport)

    error = exc_info.value
    assert isinstance(error.aws_cause, ProbeError)
    assert isinstance(error.gcp_cause, ProbeError)
    assert error.aws_cause.provider == "aws"
    assert error.gcp_cause.provider == "gcp"
    assert str(error.aws_cause) in str(error)
    assert str(error.gcp_cause) in str(error)
    assert error.to_dict()["code"] == "DETECTION_FAILED"


def test_resolve_gcp_misconfigured_is_distinguishable(metadata_server, settings):
    metadata_server.on_gcp()
    metadata_server.add(GCP_ZONE_HOST, GCP_ZONE_PATH, status=403, text="Forbidden")

    with pytest.raises(DetectionError) as exc_info:
        resolve(settings, transport=metadata_server.transport)

    assert "403" in str(exc_info.value.gcp_cause)
    assert "403" not in str(exc_info.value.aws_cause)


def test_generate_locator_forced_location_skips_detection(metadata_server, settings):
    forced = settings.model_copy(update={"location": "ncbi"})

    locator = generate_locator(forced, transport=metadata_server.transport)

    assert isinstance(locator, ManualLocator)
    assert locator.region() == "ncbi"
    assert metadata_server.calls == []


def test_generate_locator_detects_without_location(metadata_server, settings):
    metadata_server.on_aws()

    locator = generate_locator(settings, transport=metadata_server.transport)

    assert isinstance(locator, AwsLocator)


def test_traditional_location(metadata_server, settings):
    metadata_server.on_aws("us-east-1")
    locator = AwsLocator(settings, transport=metadata_server.transport)

    assert traditional_location(locator) == "s3.us-east-1"
    assert traditional_location(ManualLocator("ncbi")) == "ncbi"


def test_traditional_location_with_known_region(metadata_server, settings):
    locator = GcpLocator(settings, transport=metadata_server.transport)

    assert traditional_location(locator, region="us-central1-a") == "gs.us-central1-a"
    assert metadata_server.calls == []
