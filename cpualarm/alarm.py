import logging
from typing import NamedTuple, Optional

from botocore.exceptions import BotoCoreError, ClientError
from clickclick import Action, info

from .config import AlarmOptions

logger = logging.getLogger(__name__)

ALARM_NAME_PREFIX = 'awsec2'

PENDING = 'pending'
CREATED = 'created'
ENABLED = 'enabled'
FAILED = 'failed'
SKIPPED = 'skipped'


class AlarmResult(NamedTuple):
    instance_id: str
    alarm_name: str
    state: str
    error: Optional[str] = None


def get_alarm_name(instance_id: str, prefix: str) -> str:
    return '{}-{}-{}'.format(ALARM_NAME_PREFIX, instance_id, prefix)


def instance_action_arn(region: str, account_id: str, action: str) -> str:
    return 'arn:aws:swf:{}:{}:action/actions/AWS_EC2.InstanceId.{}/1.0'.format(
        region, account_id, action)


def sns_topic_arn(region: str, account_id: str, topic: str) -> str:
    return 'arn:aws:sns:{}:{}:{}'.format(region, account_id, topic)


def build_alarm_params(instance_id: str, account_id: str, region: str,
                       options: AlarmOptions) -> dict:
    threshold = float(options.threshold)
    return {
        'AlarmName': get_alarm_name(instance_id, options.alarm_prefix),
        'ComparisonOperator': 'LessThanThreshold',
        'EvaluationPeriods': 1,
        'MetricName': 'CPUUtilization',
        'Namespace': 'AWS/EC2',
        'Period': options.period,
        'Statistic': 'Average',
        'Threshold': threshold,
        'ActionsEnabled': True,
        'AlarmDescription':
            'Alarm when server CPU falls below {:f} percent'.format(threshold),
        'AlarmActions': [
            instance_action_arn(region, account_id, options.action),
            sns_topic_arn(region, account_id, options.sns_topic)
        ],
        'Dimensions': [{
            'Name': 'InstanceId',
            'Value': instance_id
        }]
    }


def create_alarm(cloudwatch: object, params: dict) -> AlarmResult:
    """Create the alarm and enable its actions.

    A failure in either step is reported and returned as a failed result,
    it never stops the caller from handling the next instance.
    """
    instance_id = params['Dimensions'][0]['Value']
    alarm_name = params['AlarmName']
    state = PENDING

    msg = 'Creating alarm {} for EC2 instance {}..'.format(alarm_name, instance_id)
    with Action(msg) as act:
        try:
            cloudwatch.put_metric_alarm(**params)
            state = CREATED
            cloudwatch.enable_alarm_actions(AlarmNames=[alarm_name])
            state = ENABLED
        except (ClientError, BotoCoreError) as e:
            logger.debug("Alarm {} failed in state {}".format(alarm_name, state))
            act.error(str(e))
            return AlarmResult(instance_id, alarm_name, FAILED, str(e))

    info('Enabled alarm {} for EC2 instance {}'.format(alarm_name, instance_id))
    return AlarmResult(instance_id, alarm_name, state)


def provision_alarms(cloudwatch: object, instance_ids: list, account_id: str,
                     region: str, options: AlarmOptions) -> list:
    results = []
    for instance_id in instance_ids:
        params = build_alarm_params(instance_id, account_id, region, options)
        if options.dry_run:
            info('Dry run, would create alarm: {}'.format(params))
            results.append(AlarmResult(instance_id, params['AlarmName'], SKIPPED))
        else:
            results.append(create_alarm(cloudwatch, params))
    return results
