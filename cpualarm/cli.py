import click
import logging

from botocore.exceptions import BotoCoreError, ClientError
from clickclick import info, warning

from . import aws
from .alarm import provision_alarms, ENABLED, FAILED, SKIPPED
from .config import ACTIONS, AlarmOptions, ConfigurationError, \
    parse_instance_ids, validate_options
from .instances import select_instance_ids


def configure_logging(level):
    logging.basicConfig(level=logging.WARN, format='%(asctime)s %(levelname)s: %(message)s')
    logging.getLogger("cpualarm").setLevel(level)
    logging.getLogger('botocore').setLevel(logging.WARN)
    logging.getLogger('urllib3.connectionpool').setLevel(logging.WARN)


def print_summary(results: list):
    enabled = [r for r in results if r.state == ENABLED]
    failed = [r for r in results if r.state == FAILED]
    skipped = [r for r in results if r.state == SKIPPED]
    if skipped:
        info('Dry run, {} alarms not created'.format(len(skipped)))
    else:
        info('Enabled {} of {} alarms'.format(len(enabled), len(results)))
    for r in failed:
        warning('Failed to set up alarm {} for {}: {}'.format(
            r.alarm_name, r.instance_id, r.error))


actions_help = 'EC2 action to take when alarm is triggered: {}, default: Terminate'.format(
    ', '.join(ACTIONS))
period_help = 'period in seconds: 1, 5, 10, 30 or a multiple of 60, default: 900'


@click.command()
@click.option('-n', '--name', 'name', help='Name tag of EC2 instances')
@click.option('-t', '--tag-key', 'tag_key', help='tag key of EC2 instances')
@click.option('-i', '--instance-ids', 'instance_ids', default='',
              help='EC2 instance IDs, e.g. i-1234567890abcdef0,i-1234567890abcdef1')
@click.option('-a', '--alarm-prefix', 'alarm_prefix', help='alarm name prefix, required')
@click.option('-s', '--sns-topic', 'sns_topic', help='SNS topic name to notify, required')
@click.option('-r', '--running', 'running', is_flag=True, default=False,
              help='create alarms only for running instances')
@click.option('-action', '--action', 'action', default='Terminate', help=actions_help)
@click.option('-thres', '--threshold', 'threshold', default=1.0, type=float,
              help='CPU utilization threshold in percent, default: 1.0')
@click.option('-p', '--period', 'period', default=900, type=int, help=period_help)
@click.option('--region', help='AWS region, default: from the AWS configuration')
@click.option('--dry-run', is_flag=True, default=False,
              help='show the alarms without creating them')
@click.option('--debug', is_flag=True, default=False)
def cli(name: str,
        tag_key: str,
        instance_ids: str,
        alarm_prefix: str,
        sns_topic: str,
        running: bool,
        action: str,
        threshold: float,
        period: int,
        region: str,
        dry_run: bool,
        debug: bool):
    """Create CPU utilization alarms for the selected EC2 instances."""

    configure_logging(logging.DEBUG if debug else logging.INFO)

    options = AlarmOptions(
        name=name,
        tag_key=tag_key,
        instance_ids=parse_instance_ids(instance_ids),
        alarm_prefix=alarm_prefix,
        sns_topic=sns_topic,
        running=running,
        action=action,
        threshold=threshold,
        period=period,
        region=region,
        dry_run=dry_run
    )
    try:
        validate_options(options)
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    try:
        region = aws.get_region(options.region)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    try:
        ec2 = aws.boto_client('ec2', region)
        instance_ids = select_instance_ids(ec2, options)
    except (ClientError, BotoCoreError) as e:
        raise click.ClickException('Failed to list EC2 instances: {}'.format(e))

    if not instance_ids:
        info('No matching EC2 instances found in {}'.format(region))
        return

    try:
        account_id = aws.get_account_id(aws.boto_client('sts', region))
    except (ClientError, BotoCoreError) as e:
        raise click.ClickException('Failed to look up caller identity: {}'.format(e))

    cloudwatch = aws.boto_client('cloudwatch', region)
    results = provision_alarms(cloudwatch, instance_ids, account_id, region, options)
    print_summary(results)
