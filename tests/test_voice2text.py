from unittest import mock

import pytest
import requests

from reading_coach.asr import voice2text


def _audio(tmp_path):
    path = tmp_path / "chunk.wav"
    path.write_bytes(b"RIFF0000WAVE")
    return str(path)


def test_missing_file_is_unavailable(tmp_path):
    result = voice2text(str(tmp_path / "nope.wav"))

    assert not result.available
    assert "not found" in result.error


def test_successful_transcription(tmp_path):
    response = mock.Mock()
    response.json.return_value = {
        "text": " The cat sat ",
        "word_timestamps": [{"word": "The", "start": 0.0, "end": 0.2}],
    }
    with mock.patch("requests.post", return_value=response) as post:
        result = voice2text(_audio(tmp_path), url="http://asr.test/asr", timeout=5)

    assert result.available
    assert result.text == "The cat sat"
    assert result.word_timestamps[0]["word"] == "The"
    assert post.call_args.args[0] == "http://asr.test/asr"
    assert post.call_args.kwargs["timeout"] == 5


def test_connection_error_is_reported_not_raised(tmp_path):
    with mock.patch(
        "requests.post",
        side_effect=requests.ConnectionError("refused"),
    ):
        result = voice2text(_audio(tmp_path))

    assert not result.available
    assert result.text == ""
    assert "refused" in result.error


def test_http_error_is_reported(tmp_path):
    response = mock.Mock()
    response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    with mock.patch("requests.post", return_value=response):
        result = voice2text(_audio(tmp_path))

    assert not result.available


@pytest.mark.parametrize("body", [None, ["not", "an", "object"], "text"])
def test_non_object_response_is_unavailable(tmp_path, body):
    response = mock.Mock()
    response.json.return_value = body
    with mock.patch("requests.post", return_value=response):
        result = voice2text(_audio(tmp_path))

    assert not result.available
    assert result.error == "Malformed ASR response"


def test_odd_fields_are_dropped(tmp_path):
    response = mock.Mock()
    response.json.return_value = {
        "text": 42,
        "word_timestamps": ["the", {"word": "cat", "start": 0.1, "end": 0.3}],
    }
    with mock.patch("requests.post", return_value=response):
        result = voice2text(_audio(tmp_path))

    assert result.available
    assert result.text == ""
    assert result.word_timestamps == ({"word": "cat", "start": 0.1, "end": 0.3},)
