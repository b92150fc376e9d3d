"""
Celery configuration for the ingestion gate workers.

Loaded by `celery_app.config_from_object("celeryconfig")` in
telemetry_gate/tasks/__init__.py.  Broker/result-backend URLs come from
the same settings object the rest of the app uses, defaulting to
localhost for local dev.
"""

from telemetry_gate.core.config import settings

# ═══════════════════════════════════════════════════════════
#  Broker & Result Backend
# ═══════════════════════════════════════════════════════════

broker_url = settings.CELERY_BROKER_URL
result_backend = settings.CELERY_RESULT_BACKEND

# ═══════════════════════════════════════════════════════════
#  Serialization — JSON only
# ═══════════════════════════════════════════════════════════

task_serializer = "json"
result_serializer = "json"
accept_content = ["json"]

# ═══════════════════════════════════════════════════════════
#  Timezone
# ═══════════════════════════════════════════════════════════

timezone = "UTC"
enable_utc = True

# ═══════════════════════════════════════════════════════════
#  Task Execution
# ═══════════════════════════════════════════════════════════

# Acknowledge after completion; a crashed worker's document is redelivered.
task_acks_late = True
task_reject_on_worker_lost = True

worker_prefetch_multiplier = 1

# Gate runs are bounded by document size; anything this slow is stuck I/O.
task_soft_time_limit = 120
task_time_limit = 150

# ═══════════════════════════════════════════════════════════
#  Result Expiry
# ═══════════════════════════════════════════════════════════

result_expires = 86400

# ═══════════════════════════════════════════════════════════
#  Worker Settings
# ═══════════════════════════════════════════════════════════

worker_send_task_events = False
task_send_sent_event = False

# ═══════════════════════════════════════════════════════════
#  Task Routes
# ═══════════════════════════════════════════════════════════
#   celery -A telemetry_gate.tasks worker -Q gate

task_routes = {
    "telemetry_gate.tasks.gate_tasks.*": {"queue": "gate"},
}

task_default_queue = "default"
