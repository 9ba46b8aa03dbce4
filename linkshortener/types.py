from typing import Any

from botocore.client import BaseClient


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]

# Type aliases for boto3 clients
type SSMClient = BaseClient
type SecretsManagerClient = BaseClient
