"""Locality tags shared by the locators and the CLI.

Keeping these in the domain layer lets adapters and the CLI agree on the
exact strings SDL expects without importing each other.
"""

from __future__ import annotations

from enum import Enum


class CloudName(str, Enum):
    """Short provider tag SDL associates with each cloud."""

    AWS = "s3"
    GCP = "gs"


class LocalityType(str, Enum):
    """How the value returned by `Locator.locality()` must be interpreted."""

    AWS_PKCS7 = "aws_pkcs7"
    GCP_JWT = "gcp_jwt"
    FORCED = "forced"

    @property
    def requires_verification(self) -> bool:
        """Whether a consumer should verify the locality as an identity artifact."""

        return self is not LocalityType.FORCED
