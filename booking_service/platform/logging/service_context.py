"""
Service context extraction for distributed logging.

Identifies the running booking-service instance in every log line.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'booking-service')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Pod name looks like booking-service-7d9f8b6c5-x2k4q; keep the random suffix
    pod_name = os.getenv('POD_NAME', '')
    if pod_name:
        instance_id = pod_name.rsplit('-', 1)[-1][:8]
    else:
        # Use PID for local development
        instance_id = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance_id}'
