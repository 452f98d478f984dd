from .aws import AwsKmsClient
from .base import KMSClient

__all__ = ["AwsKmsClient", "KMSClient"]
