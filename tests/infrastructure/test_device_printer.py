"""Tests for the device-path receipt printer."""

import threading

import pytest

from orderdesk.domain.exceptions import PrinterTransportError
from orderdesk.infrastructure.printer.device_printer import DevicePrinter


class TestDevicePrinter:

    def test_writes_bytes_verbatim(self, tmp_path):
        device = tmp_path / "lp0"
        printer = DevicePrinter(str(device))

        printer.write(b"\x1b@hello\x1dV\x00")

        assert device.read_bytes() == b"\x1b@hello\x1dV\x00"
        assert printer.device_path == str(device)

    def test_missing_device_raises_transport_error(self, tmp_path):
        printer = DevicePrinter(str(tmp_path / "no" / "such" / "lp0"))
        with pytest.raises(PrinterTransportError, match="Could not write"):
            printer.write(b"x")

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            DevicePrinter("")

    def test_concurrent_writes_do_not_interleave(self, tmp_path, monkeypatch):
        device = tmp_path / "lp0"
        log = []
        real_open = open

        class SlowHandle:
            def __init__(self, handle):
                self._handle = handle

            def write(self, data):
                log.append(("start", data))
                for byte in data:
                    self._handle.write(bytes([byte]))
                log.append(("end", data))

            def flush(self):
                self._handle.flush()

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                self._handle.close()

        def fake_open(path, mode="r", *args, **kwargs):
            return SlowHandle(real_open(path, mode, *args, **kwargs))

        monkeypatch.setattr("builtins.open", fake_open)

        printers = [DevicePrinter(str(device)) for _ in range(2)]
        threads = [
            threading.Thread(target=p.write, args=(payload,))
            for p, payload in zip(printers, (b"A" * 200, b"B" * 200))
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert [kind for kind, _ in log] == ["start", "end", "start", "end"]
        assert log[0][1] == log[1][1]
