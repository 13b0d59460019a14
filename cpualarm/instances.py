import logging

from clickclick import print_table

from .common import name_tag
from .config import AlarmOptions

logger = logging.getLogger(__name__)

TITLES = {
    'InstanceId': 'Instance ID',
    'InstanceType': 'Type',
    'StateName': 'State',
    'NameTag': 'Name Tag',
}


def build_filters(name: str = None, tag_key: str = None,
                  running: bool = False) -> list:
    filters = []
    if name:
        filters.append({'Name': 'tag:Name', 'Values': [name]})
    if tag_key:
        filters.append({'Name': 'tag-key', 'Values': [tag_key]})
    if running:
        filters.append({'Name': 'instance-state-name', 'Values': ['running']})
    return filters


def list_instances(ec2: object, name: str = None, tag_key: str = None,
                   instance_ids: list = None, running: bool = False) -> list:
    """List instances matching the filters, in the order EC2 returns them.

    Instances of all reservations on all result pages are flattened into
    a single list.
    """
    params = {'Filters': build_filters(name, tag_key, running)}
    if instance_ids:
        params['InstanceIds'] = list(instance_ids)

    logger.debug("Describing instances with {}".format(params))
    paginator = ec2.get_paginator('describe_instances')
    return [instance
            for page in paginator.paginate(**params)
            for reservation in page['Reservations']
            for instance in reservation['Instances']]


def show_instances(instances: list):
    print_table(['InstanceId', 'InstanceType', 'StateName', 'NameTag'],
                [dict(i, StateName=i['State']['Name'], NameTag=name_tag(i))
                 for i in instances],
                titles=TITLES)


def select_instance_ids(ec2: object, options: AlarmOptions) -> list:
    instances = list_instances(
        ec2,
        name=options.name,
        tag_key=options.tag_key,
        instance_ids=options.instance_ids,
        running=options.running
    )
    if instances:
        show_instances(instances)
    return [i['InstanceId'] for i in instances]
