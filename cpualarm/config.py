from typing import NamedTuple, Optional

ACTIONS = ('Terminate', 'Stop', 'Reboot')

# periods below a minute are only valid for high-resolution metrics
SHORT_PERIODS = (1, 5, 10, 30)


class ConfigurationError(Exception):
    pass


class AlarmOptions(NamedTuple):
    name: Optional[str]
    tag_key: Optional[str]
    instance_ids: tuple
    alarm_prefix: Optional[str]
    sns_topic: Optional[str]
    running: bool = False
    action: str = 'Terminate'
    threshold: float = 1.0
    period: int = 900
    region: Optional[str] = None
    dry_run: bool = False


def parse_instance_ids(value: str) -> tuple:
    if not value:
        return ()
    return tuple(i.strip() for i in value.split(',') if i.strip())


def is_valid_period(period: int) -> bool:
    return period in SHORT_PERIODS or (period > 0 and period % 60 == 0)


def validate_options(options: AlarmOptions) -> AlarmOptions:
    """Check the options before any AWS call is made.

    Raises ConfigurationError naming the first violated constraint.
    """
    if not (options.name or options.tag_key or options.instance_ids):
        raise ConfigurationError(
            'You must provide an instance name, a tag key, or instance IDs')
    if not options.alarm_prefix:
        raise ConfigurationError('You must provide an alarm name prefix')
    if not options.sns_topic:
        raise ConfigurationError('You must provide a SNS topic')
    if options.action not in ACTIONS:
        raise ConfigurationError(
            'Valid actions are {}, got: {}'.format(', '.join(ACTIONS), options.action))
    if not is_valid_period(options.period):
        raise ConfigurationError(
            'Valid periods are 1, 5, 10, 30, or multiples of 60, got: {}'.format(options.period))
    return options
