import threading
import time

import pytest

from asciigen import worker
from asciigen.engine import AsciiOptions
from asciigen.worker import AsciiWorker, convert_message

from conftest import solid_raster


class Inbox:
    def __init__(self):
        self.messages = []
        self.received = threading.Event()

    def __call__(self, message):
        self.messages.append(message)
        self.received.set()


def test_convert_message_plain(white_2x2):
    assert convert_message(white_2x2, AsciiOptions(columns=2, charset='@ ')) == {'text': '@@\n'}


def test_convert_message_color(white_2x2):
    message = convert_message(white_2x2, AsciiOptions(columns=2, charset='@ ', color_mode=True))
    assert message['text'] == '@@\n'
    assert message['html'] == '<span style="color:rgb(255,255,255)">@@</span>\n'


def test_convert_message_error(monkeypatch, white_2x2):
    def explode(raster, options):
        raise ValueError('boom')

    monkeypatch.setattr(worker, 'convert_to_ascii', explode)
    assert convert_message(white_2x2, AsciiOptions()) == {'error': 'boom'}


def test_immediate_delivery(white_2x2):
    inbox = Inbox()
    with AsciiWorker(inbox, debounce=0) as ascii_worker:
        assert ascii_worker.request(white_2x2, AsciiOptions(columns=2, charset='@ ')) == 1
        assert inbox.received.wait(5)
    assert inbox.messages == [{'text': '@@\n'}]


def test_debounce_keeps_only_latest_request():
    inbox = Inbox()
    raster = solid_raster(40, 20)
    with AsciiWorker(inbox, debounce=0.2) as ascii_worker:
        for columns in (10, 20, 30):
            ascii_worker.request(raster, AsciiOptions(columns=columns, charset='@ '))
        assert ascii_worker.generation == 3
        assert inbox.received.wait(5)
        time.sleep(0.3)
    assert len(inbox.messages) == 1
    assert inbox.messages[0]['text'].splitlines()[0] == '@' * 30


def test_superseded_result_is_dropped(monkeypatch, white_2x2):
    gate = threading.Event()
    started = threading.Event()
    real_convert = worker.convert_to_ascii

    def slow_convert(raster, options):
        if options.columns == 1:
            started.set()
            gate.wait(5)
        return real_convert(raster, options)

    monkeypatch.setattr(worker, 'convert_to_ascii', slow_convert)
    inbox = Inbox()
    with AsciiWorker(inbox, debounce=0) as ascii_worker:
        ascii_worker.request(white_2x2, AsciiOptions(columns=1, charset='@ '))
        assert started.wait(5)
        ascii_worker.request(white_2x2, AsciiOptions(columns=2, charset='@ '))
        gate.set()
        assert inbox.received.wait(5)
    assert inbox.messages == [{'text': '@@\n'}]


def test_error_is_delivered_as_message(monkeypatch, white_2x2):
    def explode(raster, options):
        raise RuntimeError()

    monkeypatch.setattr(worker, 'convert_to_ascii', explode)
    inbox = Inbox()
    with AsciiWorker(inbox, debounce=0) as ascii_worker:
        ascii_worker.request(white_2x2, AsciiOptions())
        assert inbox.received.wait(5)
    assert inbox.messages == [{'error': 'RuntimeError'}]


def test_closed_worker_rejects_requests(white_2x2):
    ascii_worker = AsciiWorker(lambda message: None)
    ascii_worker.close()
    with pytest.raises(RuntimeError):
        ascii_worker.request(white_2x2, AsciiOptions())


def test_close_cancels_pending_request(white_2x2):
    inbox = Inbox()
    ascii_worker = AsciiWorker(inbox, debounce=0.2)
    ascii_worker.request(white_2x2, AsciiOptions())
    ascii_worker.close()
    time.sleep(0.3)
    assert inbox.messages == []
