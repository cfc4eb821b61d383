from __future__ import annotations

from flask import current_app, request
from flask.views import MethodView

from .errors import FeatureDisabled, Unauthorized
from .models import EventConfig
from .security import check_host_pin


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def secret_santa_enabled() -> bool:
    return EventConfig.get_singleton().secret_santa_enabled


# --------- Class-based view Mixins ----------

class SecretSantaEnabledMixin(MethodView):
    def dispatch_request(self, *args, **kwargs):
        if not secret_santa_enabled():
            raise FeatureDisabled()
        return super().dispatch_request(*args, **kwargs)


class PinRequiredMixin(MethodView):
    """
    Every privileged request carries the shared host PIN in its JSON body.
    Nothing is remembered between requests.
    """
    def dispatch_request(self, *args, **kwargs):
        if not check_host_pin(json_body().get("pin")):
            current_app.logger.warning("Rejected host PIN for %s %s", request.method, request.path)
            raise Unauthorized()
        return super().dispatch_request(*args, **kwargs)


class HostSecretSantaMixin(SecretSantaEnabledMixin, PinRequiredMixin):
    pass
