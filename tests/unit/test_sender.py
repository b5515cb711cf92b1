"""Unit tests for transports.tcp.sender module."""

import math
from unittest.mock import Mock

import pytest

from syncnet.errors import TransmissionError
from syncnet.transports.tcp.sender import (
    DEFAULT_CHUNK_SIZE,
    TransmissionProgress,
    send_chunked,
)


def accepting_socket():
    """Socket double that accepts every byte and records each chunk."""
    sock = Mock()
    sock.chunks = []

    def send(chunk):
        sock.chunks.append(bytes(chunk))
        return len(chunk)

    sock.send.side_effect = send
    return sock


class TestTransmissionProgress:
    """Test TransmissionProgress bookkeeping."""

    def test_advance(self):
        """Test advance moves offset and totals together."""
        progress = TransmissionProgress(remaining=10)
        progress.advance(4)

        assert progress.offset == 4
        assert progress.sent == 4
        assert progress.remaining == 6


class TestSendChunked:
    """Test suite for send_chunked."""

    def test_default_chunk_size(self):
        """Test default chunk leaves room for a terminator in a 4096 buffer."""
        assert DEFAULT_CHUNK_SIZE == 4095

    def test_single_chunk(self):
        """Test a payload within capacity goes out in one send."""
        sock = accepting_socket()

        assert send_chunked(sock, b"ping") == 4
        assert sock.chunks == [b"ping"]

    def test_exact_capacity(self):
        """Test a payload of exactly one chunk uses one send."""
        sock = accepting_socket()
        payload = b"x" * DEFAULT_CHUNK_SIZE

        assert send_chunked(sock, payload) == DEFAULT_CHUNK_SIZE
        assert sock.send.call_count == 1

    @pytest.mark.parametrize("length", [8, 9, 17, 100])
    def test_multiple_chunks(self, length):
        """Test large payloads are split into ceil(L / C) sends."""
        sock = accepting_socket()
        payload = bytes(range(length))

        assert send_chunked(sock, payload, chunk_size=8) == length
        assert sock.send.call_count == math.ceil(length / 8)
        assert b"".join(sock.chunks) == payload
        assert all(len(chunk) <= 8 for chunk in sock.chunks)

    def test_default_capacity_split(self):
        """Test a payload over the default capacity needs two sends."""
        sock = accepting_socket()

        assert send_chunked(sock, b"a" * 5000) == 5000
        assert [len(chunk) for chunk in sock.chunks] == [4095, 905]

    def test_chunk_boundaries_repeatable(self):
        """Test the same payload always splits the same way."""
        first = accepting_socket()
        second = accepting_socket()
        payload = b"0123456789" * 7

        send_chunked(first, payload, chunk_size=16)
        send_chunked(second, payload, chunk_size=16)

        assert first.chunks == second.chunks

    def test_empty_payload(self):
        """Test empty payload sends nothing and returns zero."""
        sock = Mock()

        assert send_chunked(sock, b"") == 0
        sock.send.assert_not_called()

    def test_short_write_stops(self):
        """Test a short write adds the partial count and stops."""
        sock = Mock()
        sock.send.side_effect = [4, 4, 1]

        sent = send_chunked(sock, b"a" * 20, chunk_size=4)

        assert sent == 9
        assert sock.send.call_count == 3

    def test_short_first_write(self):
        """Test a short write on the first chunk."""
        sock = Mock()
        sock.send.return_value = 2

        assert send_chunked(sock, b"abcdef", chunk_size=4) == 2
        sock.send.assert_called_once_with(b"abcd")

    def test_zero_byte_write(self):
        """Test a send that accepts nothing counts as a short write."""
        sock = Mock()
        sock.send.return_value = 0

        assert send_chunked(sock, b"abc") == 0
        assert sock.send.call_count == 1

    def test_send_failure(self):
        """Test a failing send raises without a byte count."""
        sock = Mock()
        sock.send.side_effect = [4, BrokenPipeError("Broken pipe")]

        with pytest.raises(TransmissionError, match="send failed") as exc_info:
            send_chunked(sock, b"a" * 8, chunk_size=4)

        assert isinstance(exc_info.value.__cause__, BrokenPipeError)
        assert sock.send.call_count == 2

    def test_invalid_chunk_size(self):
        """Test chunk size must be positive."""
        with pytest.raises(ValueError, match="chunk_size"):
            send_chunked(Mock(), b"data", chunk_size=0)
