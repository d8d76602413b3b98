from __future__ import annotations

from flask import Flask

from csssync.config import SyncConfig
from csssync.queue import ChangeQueue
from csssync.service import SyncService
from csssync.web.activity import ActivityLog


def create_app(
    service: SyncService | None = None,
    config: dict | None = None,
    sync_config: SyncConfig | None = None,
    change_queue: ChangeQueue | None = None,
) -> Flask:
    """Create and configure the local agent Flask app."""
    app = Flask(__name__)
    app.config["APPLY_TIMEOUT"] = 30.0
    app.config.update(config or {})

    if service is None:
        service = SyncService(sync_config)
        if service.config.root_path:
            service.configure(service.config.root_path, service.config.domain_mappings)

    if change_queue is None:
        change_queue = ChangeQueue(service.apply_change, delay=service.config.queue_delay)

    activity = ActivityLog()
    service.event_bus.on_all(activity)

    app.extensions["sync_service"] = service
    app.extensions["change_queue"] = change_queue
    app.extensions["activity_log"] = activity

    from csssync.web.routes.api import api_bp

    app.register_blueprint(api_bp)

    return app
