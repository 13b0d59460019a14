def tags_as_dict(tags: list) -> dict:
    return {t['Key']: t['Value'] for t in tags}


def name_tag(instance: dict) -> str:
    return tags_as_dict(instance.get('Tags', [])).get('Name', '')
