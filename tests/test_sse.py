from gaja_overlay.host.sse import SseDecoder


def test_single_message():
    decoder = SseDecoder()

    payloads = decoder.feed(b'data: {"is_listening": true}\n\n')

    assert payloads == [{"is_listening": True}]
    assert decoder.pending == ""


def test_message_split_across_chunks():
    decoder = SseDecoder()

    assert decoder.feed(b'data: {"text": "Dzi') == []
    assert decoder.feed(b'e\xc5') == []
    assert decoder.feed(b'\x84 dobry"}\n') == []
    assert decoder.feed(b"\n") == [{"text": "Dzień dobry"}]


def test_crlf_and_multiple_messages():
    decoder = SseDecoder()

    payloads = decoder.feed(
        b'data: {"text": "a"}\r\n\r\ndata: {"text": "b"}\r\n\r\ndata: {"te'
    )

    assert payloads == [{"text": "a"}, {"text": "b"}]
    assert decoder.pending == 'data: {"te'


def test_skips_comments_other_fields_and_bad_json():
    decoder = SseDecoder()

    payloads = decoder.feed(
        b": keep-alive\n\n"
        b"event: status\ndata: {\"is_speaking\": true}\n\n"
        b"data: {broken\n\n"
        b"data: [1, 2]\n\n"
    )

    assert payloads == [{"is_speaking": True}]


def test_multiline_data_is_joined():
    decoder = SseDecoder()

    payloads = decoder.feed(b'data: {"text":\ndata: "x"}\n\n')

    assert payloads == [{"text": "x"}]
