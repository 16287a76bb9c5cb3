"""Locust entry point for the storefront.

User classes:

- ``ShopperUser``: browses the catalogue, fills a cart and places orders
- ``CheckoutUser``: opens hosted checkout sessions and replays the webhook
  (the server must run with the fake gateway, i.e. without STRIPE_SECRET_KEY)
- ``AdminUser``: dashboard, order administration and restocking
- ``MixedWorkloadUser``: weighted blend of all of the above

Examples:
    locust -f loadtests/locustfile.py --host http://localhost:8000
    locust -f loadtests/locustfile.py CheckoutUser --host http://localhost:8000
    locust -f loadtests/locustfile.py MixedWorkloadUser --headless -u 50 -r 5 -t 5m --csv=results/storefront
"""

import logging
from collections import Counter

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.admin import AdminUser  # noqa: F401
from loadtests.scenarios.checkout import CheckoutUser  # noqa: F401
from loadtests.scenarios.mixed import MixedWorkloadUser  # noqa: F401
from loadtests.scenarios.shopper import ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")

failures_by_status = Counter()


def _check_health(host: str) -> None:
    try:
        response = requests.get(f"{host.rstrip('/')}/health", timeout=5)
    except requests.RequestException as exc:
        logger.warning("Health check against %s failed: %s", host, exc)
        return
    logger.info("Health check against %s: %s", host, response.status_code)


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log the API's own error message for failed requests."""
    if exception is not None:
        failures_by_status["exception"] += 1
        logger.error("%s %s raised %s", request_type, name, exception)
        return

    if response is not None and response.status_code >= 400:
        failures_by_status[str(response.status_code)] += 1
        logger.error("%s %s -> %s %s", request_type, name, response.status_code, extract_error_detail(response))


@events.test_start.add_listener
def on_test_start(environment, **_kw):
    failures_by_status.clear()
    if environment.host:
        _check_health(environment.host)


@events.test_stop.add_listener
def on_test_stop(environment, **_kw):
    total = environment.stats.total
    logger.info(
        "Finished: %s requests, %s failures, median %s ms, p95 %s ms",
        total.num_requests,
        total.num_failures,
        total.median_response_time,
        total.get_response_time_percentile(0.95),
    )
    for status, count in failures_by_status.most_common():
        logger.info("  %s: %s", status, count)
