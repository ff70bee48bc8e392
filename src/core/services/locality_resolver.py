"""Locality resolution.

Probes AWS first and GCP second, strictly in sequence. The first provider that
answers wins; when both fail the caller gets a `DetectionError` carrying both
causes so an operator can tell "not on a known cloud" apart from "on a cloud
with a blocked metadata service".

GCP detection asks the metadata server for the instance identity token and
then for the zone; both must answer, and a zone of one character or less
counts as a failed detection.
"""

from __future__ import annotations

import logging

import httpx

from adapters.locators import (
    AwsLocator,
    GcpLocator,
    ManualLocator,
    resolve_aws_region,
    resolve_gcp_zone,
    retrieve_gcp_instance_token,
)
from core.config import AppSettings
from core.errors import DetectionError, ProbeError
from core.interfaces.locator import Locator

logger = logging.getLogger(__name__)


def resolve(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> Locator:
    """Detect the cloud provider the process runs on."""

    settings = settings or AppSettings()
    try:
        region = resolve_aws_region(settings=settings, transport=transport)
    except ProbeError as aws_exc:
        logger.debug("AWS detection failed: %s", aws_exc)
        try:
            retrieve_gcp_instance_token(settings=settings, transport=transport)
            zone = resolve_gcp_zone(settings=settings, transport=transport)
        except ProbeError as gcp_exc:
            logger.debug("GCP detection failed: %s", gcp_exc)
            raise DetectionError(aws_exc, gcp_exc) from gcp_exc
        logger.info("Detected GCP, zone %s", zone)
        return GcpLocator(settings, transport=transport)

    logger.info("Detected AWS, region %s", region)
    return AwsLocator(settings, transport=transport)


def generate_locator(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> Locator:
    """Manual locator when a location is configured, detection otherwise."""

    settings = settings or AppSettings()
    if settings.location:
        logger.info("Using forced location %s", settings.location)
        return ManualLocator(settings.location)
    return resolve(settings, transport=transport)


def traditional_location(locator: Locator, *, region: str | None = None) -> str:
    """`<cloud>.<region>` (e.g. `s3.us-east-1`); forced locations pass through."""

    if region is None:
        region = locator.region()
    if region == locator.cloud_name:
        return region
    return f"{locator.cloud_name}.{region}"
