import logging

log = logging.getLogger(__name__)


def validate(schema, payload):
    """Coerce ``payload`` into ``schema``.

    Returns ``(data, errors)``. ``data`` holds only the declared fields,
    transformed by their rules, and is None when ``errors`` is non-empty.
    Every violated rule contributes one message; the first failure does not
    stop the walk. Unknown keys are ignored and ``payload`` is never
    modified. A JSON ``null`` counts as an absent field.
    """
    if not isinstance(payload, dict):
        return None, ["payload must be a JSON object"]

    data = {}
    errors = []
    for name, rule in schema.items():
        value = payload.get(name)
        if value is None:
            if rule.required:
                errors.append("%s is required" % name)
            continue
        if rule.type_check is not None and not rule.type_check(value):
            errors.append("%s %s" % (name, rule.type_message))
            continue
        if rule.transform is not None:
            value = rule.transform(value)
        if rule.domain_check is not None:
            problem = rule.domain_check(value)
            if problem:
                errors.append("%s %s" % (name, problem))
                continue
        data[name] = value

    if errors:
        log.info("validation failed: %s", errors)
        return None, errors
    return data, []
