# lambda_function.py
import logging

from .config import Settings
from .handlers import TaskHandlers, failure, message_response

log = logging.getLogger(__name__)

ROUTES = {
    ("POST", "/tasks"): "create",
    ("GET", "/tasks"): "get_all",
    ("GET", "/tasks/{id}"): "get_by_id",
    ("PUT", "/tasks/{id}"): "update",
    ("DELETE", "/tasks/{id}"): "delete",
}


def _invoke(name, event):
    log.info(
        "handler=%s method=%s resource=%s pathp=%s",
        name, event.get("httpMethod"), event.get("resource"), event.get("pathParameters"),
    )
    # config is read per invocation; a bad environment is a 500 like any other failure
    try:
        settings = Settings.from_env()
        logging.getLogger().setLevel(settings.log_level)
        handlers = TaskHandlers.from_settings(settings)
    except Exception:
        log.exception("%s handler setup failed", name)
        return failure(name, event)
    return getattr(handlers, name)(event)


def create_handler(event, context=None):
    return _invoke("create", event)


def update_handler(event, context=None):
    return _invoke("update", event)


def get_by_id_handler(event, context=None):
    return _invoke("get_by_id", event)


def get_all_handler(event, context=None):
    return _invoke("get_all", event)


def delete_handler(event, context=None):
    return _invoke("delete", event)


def handler(event, context=None):
    method = event.get("httpMethod")
    resource = event.get("resource")
    name = ROUTES.get((method, resource))
    if name is None:
        log.warning("unsupported route method=%s resource=%s", method, resource)
        return message_response(400, "Unsupported route: %s %s" % (method, resource))
    return _invoke(name, event)


# single-function deployments point at lambda_handler
lambda_handler = handler
