"""BDD tests for the scheduled liveness sweep."""

from alerts.device.sweep import RunLivenessSweep
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/liveness_sweep.feature")


@when("the liveness sweep runs", target_fixture="removed")
def sweep_runs(push):
    return current_domain.process(RunLivenessSweep(), asynchronous=False)


@then(parsers.cfparse("the sweep removes {count:d} devices"))
def sweep_removed(removed, count):
    assert removed == count


@then(parsers.cfparse('every device was probed with "{key}" set to "{value}"'))
def every_device_probed(push, key, value):
    assert sorted(probe["token"] for probe in push.sent_probes) == ["A", "B", "C"]
    assert all(probe["data"] == {key: value} for probe in push.sent_probes)
