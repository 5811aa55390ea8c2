#!/usr/bin/env python3
"""
Unit тесты для lock.py
"""

import threading

from gjp_mcp.tools.project.lock import NullLock, ThreadLock


class TestLocks:
    """Тесты для NullLock и ThreadLock"""

    def test_null_lock_never_blocks(self):
        lock = NullLock()
        with lock.hold():
            with lock.hold():
                pass

    def test_thread_lock_excludes_other_threads(self):
        lock = ThreadLock()
        acquired = []

        def contender():
            acquired.append(lock.hold().acquire(blocking=False))

        with lock.hold():
            thread = threading.Thread(target=contender)
            thread.start()
            thread.join()

        assert acquired == [False]
        with lock.hold():
            pass
