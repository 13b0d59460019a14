import logging

import boto3

from botocore.exceptions import BotoCoreError

from .config import ConfigurationError

logger = logging.getLogger(__name__)


def boto_client(service: str, region_name: str, **kwargs):
    return boto3.client(service, region_name=region_name, **kwargs)


def get_region(region: str = None) -> str:
    """Return the given region or the default one of the boto3 session."""
    if region:
        return region
    try:
        default = boto3.session.Session().region_name
    except BotoCoreError as e:
        raise ConfigurationError('Failed to load AWS configuration: {}'.format(e))
    if not default:
        raise ConfigurationError(
            'No AWS region configured, use --region or set AWS_DEFAULT_REGION')
    return default


def get_account_id(sts: object) -> str:
    resp = sts.get_caller_identity()
    account = resp['Account']
    logger.debug("Running as {} in account {}".format(resp.get('Arn'), account))
    return account
