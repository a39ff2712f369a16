from __future__ import annotations

from hypothesis import HealthCheck, settings

# Hypothesis can get "flaky" on slow filesystems / loaded CPUs.
# That is a performance healthcheck, not a functional bug: suppress it.
settings.register_profile(
    "tidyimports_stable",
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,  # avoid timeouts from timing variance
)

settings.load_profile("tidyimports_stable")
