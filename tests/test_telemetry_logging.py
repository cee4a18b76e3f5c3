import logging

from monosyllabize.utils.telemetry import StructuredTelemetry, TelemetryLogger


def test_structured_telemetry_emits_logging_events(caplog):
    telemetry = StructuredTelemetry()
    listener = TelemetryLogger()
    telemetry.add_listener(listener)

    caplog.set_level(logging.INFO, logger="monosyllabize.utils.telemetry")

    telemetry.start_trace("test-trace")
    with telemetry.timer("phase"):
        pass
    telemetry.increment("cache.graph.hit")
    telemetry.annotate("seed", 3)

    messages = [record.message for record in caplog.records]
    assert any("Telemetry trace_started: test-trace" in message for message in messages)
    assert any("Telemetry timer_started: phase" in message for message in messages)
    assert any("Telemetry timing: phase" in message for message in messages)
    assert any("Telemetry counter: cache.graph.hit" in message for message in messages)
    assert any("Telemetry metadata: seed" in message for message in messages)


def test_level_map_demotes_noisy_events(caplog):
    telemetry = StructuredTelemetry()
    telemetry.add_listener(TelemetryLogger(level_map={"counter": logging.DEBUG}))

    caplog.set_level(logging.INFO, logger="monosyllabize.utils.telemetry")

    telemetry.start_trace("run")
    telemetry.increment("assigned.direct")

    messages = [record.message for record in caplog.records]
    assert not any("Telemetry counter" in message for message in messages)


def test_snapshot_aggregates_timings_and_counters():
    ticks = iter([0.0, 1.0, 3.0, 4.0, 4.5])
    telemetry = StructuredTelemetry(time_fn=lambda: next(ticks))

    telemetry.start_trace("run")
    with telemetry.timer("graph") as metadata:
        metadata["onset_keys"] = 4
    with telemetry.timer("graph"):
        pass
    telemetry.increment("assigned.direct", 2)

    snapshot = telemetry.snapshot()
    assert snapshot["name"] == "run"
    assert snapshot["timings"]["graph"]["count"] == 2
    assert snapshot["timings"]["graph"]["total"] == 2.5
    assert snapshot["events"][0]["metadata"] == {"onset_keys": 4}
    assert snapshot["counters"] == {"assigned.direct": 2.0}


def test_removed_listener_stops_receiving_events():
    received = []
    telemetry = StructuredTelemetry()

    def listener(event_type, payload):
        received.append(event_type)

    telemetry.add_listener(listener)
    telemetry.start_trace("run")
    telemetry.remove_listener(listener)
    telemetry.increment("ignored")

    assert received == ["trace_started"]
