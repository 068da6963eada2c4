import time
import unittest
from unittest import mock

import requests

from searchle.core.exceptions import SourceUnavailableError
from searchle.data.dictionary import WordDictionary
from searchle.data.word_source import DictionaryWordSource, HttpWordSource, HttpWordSourceConfig
from searchle.engine.generator import GeneratorConfig, PuzzleGenerator


def fake_session(payload) -> mock.MagicMock:
    session = mock.MagicMock()
    response = mock.MagicMock()
    response.json.return_value = payload
    session.get.return_value = response
    return session


class DictionaryWordSourceTests(unittest.TestCase):
    def test_delegates_to_dictionary(self) -> None:
        source = DictionaryWordSource(WordDictionary(words=["trap", "tree", "easy"]))
        self.assertEqual(list(source.fetch_candidates(4, "T")), ["TRAP", "TREE"])
        self.assertEqual(list(source.fetch_candidates(4)), ["EASY", "TRAP", "TREE"])


class HttpWordSourceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = HttpWordSourceConfig(base_url="https://words.test/words", timeout_seconds=2.0, max_results=50)

    def test_requests_spelling_pattern_for_length(self) -> None:
        session = fake_session([{"word": "trap", "score": 10}, {"word": "tree"}, {"word": "easy"}])
        source = HttpWordSource(self.config, session=session)

        self.assertEqual(source.fetch_candidates(4, "t"), ["TRAP", "TREE"])
        session.get.assert_called_once_with(
            "https://words.test/words",
            params={"sp": "????", "max": 50},
            timeout=2.0,
        )

    def test_filters_unplayable_and_wrong_length_words(self) -> None:
        payload = [{"word": "ice cream"}, {"word": "x-ray"}, {"word": "apple"}, "lemon", {"word": "APPLE"}, {"score": 3}, 7]
        source = HttpWordSource(self.config, session=fake_session(payload))
        self.assertEqual(list(source.fetch_candidates(5)), ["APPLE", "LEMON"])

    def test_caches_per_length(self) -> None:
        session = fake_session([{"word": "trap"}, {"word": "easy"}])
        source = HttpWordSource(self.config, session=session)
        source.fetch_candidates(4, "T")
        source.fetch_candidates(4, "E")
        self.assertEqual(session.get.call_count, 1)

    def test_request_errors_become_source_unavailable(self) -> None:
        session = mock.MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        source = HttpWordSource(self.config, session=session)
        with self.assertRaises(SourceUnavailableError):
            source.fetch_candidates(4, "T")

    def test_http_status_errors_become_source_unavailable(self) -> None:
        session = fake_session([])
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("503")
        with self.assertRaises(SourceUnavailableError):
            HttpWordSource(self.config, session=session).fetch_candidates(4)

    def test_non_list_payload_is_rejected(self) -> None:
        source = HttpWordSource(self.config, session=fake_session({"error": "quota"}))
        with self.assertRaises(SourceUnavailableError):
            source.fetch_candidates(4)

    def test_invalid_json_is_rejected(self) -> None:
        session = fake_session(None)
        session.get.return_value.json.side_effect = ValueError("bad json")
        with self.assertRaises(SourceUnavailableError):
            HttpWordSource(self.config, session=session).fetch_candidates(4)

    def test_concurrent_lookups_share_one_request_per_length(self) -> None:
        def slow_get(url, params, timeout):
            time.sleep(0.05)
            length = len(params["sp"])
            words = [letter + filler * (length - 1) for letter in "BANDIT" for filler in "XY"]
            if length == 6:
                words.append("BANDIT")
            response = mock.MagicMock()
            response.json.return_value = [{"word": word} for word in words]
            return response

        session = mock.MagicMock()
        session.get.side_effect = slow_get
        source = HttpWordSource(self.config, session=session)
        PuzzleGenerator(source, GeneratorConfig(seed=1)).generate()

        patterns = sorted(call.kwargs["params"]["sp"] for call in session.get.call_args_list)
        self.assertEqual(patterns, ["????", "?????", "??????"])

    def test_base_url_from_environment(self) -> None:
        with mock.patch.dict("os.environ", {"SEARCHLE_WORD_API_URL": "https://env.test/words"}):
            self.assertEqual(HttpWordSourceConfig().base_url, "https://env.test/words")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
