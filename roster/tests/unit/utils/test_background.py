from __future__ import annotations

import threading

from roster.utils.background import InlineTaskRunner, ThreadTaskRunner


def test_inline_runner_runs_immediately() -> None:
    seen = []

    InlineTaskRunner().spawn(seen.append, 1)

    assert seen == [1]


def test_inline_runner_swallows_task_errors() -> None:
    def boom() -> None:
        raise RuntimeError("nope")

    InlineTaskRunner().spawn(boom, name="boom")


def test_thread_runner_runs_on_daemon_thread() -> None:
    seen = []
    done = threading.Event()

    def task(value: int) -> None:
        current = threading.current_thread()
        seen.append((value, current.daemon, current.name))
        done.set()

    runner = ThreadTaskRunner(name_prefix="test")
    runner.spawn(task, 7, name="job")

    assert done.wait(5.0)
    assert runner.join(timeout=5.0) is True
    assert seen == [(7, True, "test-job")]


def test_thread_runner_join_reports_unfinished_work() -> None:
    release = threading.Event()
    runner = ThreadTaskRunner()
    runner.spawn(release.wait, 5.0)

    assert runner.join(timeout=0.01) is False
    release.set()
    assert runner.join(timeout=5.0) is True
