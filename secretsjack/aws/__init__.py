"""AWS Secrets Manager implementation."""

from .secret_manager import AWSSecretsManager

__all__ = ["AWSSecretsManager"]
