"""Localizadores concretos (AWS, GCP, manual).

Cada módulo implementa `core.interfaces.locator.Locator`.
"""

from adapters.locators.aws import AwsLocator, resolve_aws_region, retrieve_aws_pkcs7
from adapters.locators.gcp import GcpLocator, resolve_gcp_zone, retrieve_gcp_instance_token
from adapters.locators.manual import ManualLocator

__all__ = [
	"AwsLocator",
	"GcpLocator",
	"ManualLocator",
	"resolve_aws_region",
	"resolve_gcp_zone",
	"retrieve_aws_pkcs7",
	"retrieve_gcp_instance_token",
]
