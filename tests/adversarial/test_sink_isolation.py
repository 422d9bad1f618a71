"""Adversarial tests — hostile sinks and concurrent logging.

A sink that raises anything short of a process-level exit, or one whose
``sink_name`` itself is broken, must not stop delivery or reach the
caller.  Concurrent installs and logs must never corrupt the registry.
"""

from __future__ import annotations

import threading

import pytest

from grove.models.events import LogEvent, Severity
from grove.routing.dispatcher import Dispatcher


class _BrokenNameSink:
    """Valid ``handle`` but a ``sink_name`` that raises after install."""

    def __init__(self) -> None:
        self.armed = False

    @property
    def sink_name(self) -> str:
        if self.armed:
            raise AttributeError("no name today")
        return "broken_name"

    def handle(self, event: LogEvent) -> None:
        raise RuntimeError("and a failing handle")


class _SelfUninstallingSink:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher
        self.calls = 0

    @property
    def sink_name(self) -> str:
        return "self_uninstalling"

    def handle(self, event: LogEvent) -> None:
        self.calls += 1
        self._dispatcher.uninstall(self)


class TestHostileSinks:
    @pytest.mark.parametrize(
        "error",
        [
            RuntimeError("boom"),
            ValueError("bad value"),
            KeyError("missing"),
            RecursionError("deep"),
            MemoryError(),
            ConnectionError("unreachable"),
        ],
    )
    def test_any_exception_isolated(self, dispatcher, make_failing_sink, make_recording_sink, make_event, error):
        good = make_recording_sink()
        dispatcher.install_all(make_failing_sink(error=error), good)

        handled = dispatcher.log(make_event())

        assert handled == ["recording"]
        assert len(good.received) == 1

    def test_broken_sink_name_isolated(self, dispatcher, make_recording_sink, make_event):
        broken = _BrokenNameSink()
        good = make_recording_sink()
        dispatcher.install_all(broken, good)
        broken.armed = True

        assert dispatcher.log(make_event()) == ["recording"]

    def test_uninstall_during_dispatch_keeps_snapshot(self, dispatcher, make_recording_sink, make_event):
        sneaky = _SelfUninstallingSink(dispatcher)
        after = make_recording_sink()
        dispatcher.install_all(sneaky, after)

        dispatcher.log(make_event())
        dispatcher.log(make_event())

        assert sneaky.calls == 1
        assert len(after.received) == 2

    def test_sink_logging_through_same_dispatcher_terminates(self, dispatcher, make_recording_sink):
        class _Echo:
            sink_name = "echo"

            def __init__(self) -> None:
                self.depth = 0

            def handle(self, event: LogEvent) -> None:
                if self.depth < 3:
                    self.depth += 1
                    dispatcher.debug("echo of %s", event.message)

        echo = _Echo()
        dispatcher.install(echo)

        dispatcher.info("start")

        assert echo.depth == 3


class TestConcurrency:
    def test_per_thread_fifo(self, dispatcher, make_recording_sink):
        sink = make_recording_sink()
        dispatcher.install(sink)
        per_thread = 200

        def worker(name: str) -> None:
            for i in range(per_thread):
                dispatcher.info("%d", i, tag=name)

        threads = [threading.Thread(target=worker, args=(f"t{n}",)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(sink.received) == 4 * per_thread
        for n in range(4):
            seen = [int(e.message) for e in sink.received if e.tag == f"t{n}"]
            assert seen == list(range(per_thread))

    def test_installs_racing_with_logs(self, dispatcher, make_recording_sink):
        sinks = [make_recording_sink(f"s{i}") for i in range(50)]
        stop = threading.Event()
        errors: list[BaseException] = []

        def logger_thread() -> None:
            try:
                while not stop.is_set():
                    dispatcher.log(LogEvent(severity=Severity.INFO, message="tick"))
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        reader = threading.Thread(target=logger_thread)
        reader.start()
        for sink in sinks:
            dispatcher.install(sink)
        stop.set()
        reader.join()

        assert errors == []
        assert dispatcher.sinks == sinks
