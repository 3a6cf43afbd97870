import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from crossgrid.core.constants import Orientation, PlacementMode
from crossgrid.core.exceptions import InvalidPlacementError, OrientationError, PlacementError
from crossgrid.core.models import PlacedWord
from crossgrid.engine.pipeline import run_pass
from crossgrid.io.placement import (
    JsonFilePlacement,
    StaticPlacement,
    parse_mode,
    parse_placed_word,
    parse_placed_words,
)
from crossgrid.io.placement_client import PlacementServiceClient, PlacementServiceError


RECORDS = [
    {"id": 1, "x": 0, "y": 0, "word": "cat", "orientation": "hor"},
    {"id": 2, "x": 0, "y": 0, "word": "car", "orientation": "ver"},
]


class ParsingTests(unittest.TestCase):
    def test_parse_record(self) -> None:
        word = parse_placed_word(RECORDS[1])
        self.assertEqual(word, PlacedWord(2, 0, 0, "car", Orientation.VERTICAL))

    def test_bad_orientation_is_fatal(self) -> None:
        record = dict(RECORDS[0], orientation="diag")
        with self.assertRaises(OrientationError):
            parse_placed_word(record)

    def test_missing_field(self) -> None:
        record = {k: v for k, v in RECORDS[0].items() if k != "x"}
        with self.assertRaises(InvalidPlacementError):
            parse_placed_word(record)

    def test_non_integer_and_negative_coordinates(self) -> None:
        with self.assertRaises(InvalidPlacementError):
            parse_placed_word(dict(RECORDS[0], y="0"))
        with self.assertRaises(InvalidPlacementError):
            parse_placed_word(dict(RECORDS[0], x=-2))
        with self.assertRaises(InvalidPlacementError):
            parse_placed_word(dict(RECORDS[0], id=True))

    def test_payload_shapes(self) -> None:
        self.assertEqual(len(parse_placed_words(RECORDS)), 2)
        self.assertEqual(len(parse_placed_words({"words": RECORDS})), 2)
        with self.assertRaises(InvalidPlacementError):
            parse_placed_words({"placed": RECORDS})
        with self.assertRaises(InvalidPlacementError):
            parse_placed_words(["cat"])

    def test_parse_mode(self) -> None:
        self.assertIs(parse_mode("Automatic"), PlacementMode.AUTOMATIC)
        self.assertIs(parse_mode(PlacementMode.INPUT_ORDER), PlacementMode.INPUT_ORDER)
        with self.assertRaises(ValueError):
            parse_mode("Random")

    def test_mode_toggle(self) -> None:
        self.assertIs(PlacementMode.INPUT_ORDER.toggled(), PlacementMode.AUTOMATIC)
        self.assertIs(PlacementMode.AUTOMATIC.toggled(), PlacementMode.INPUT_ORDER)


class StaticPlacementTests(unittest.TestCase):
    def test_returns_only_requested_words(self) -> None:
        placement = StaticPlacement.from_records(RECORDS)
        placed = placement.place(["cat", "dog"], PlacementMode.INPUT_ORDER)
        self.assertEqual([w.word for w in placed], ["cat"])

    def test_empty_input_yields_empty_result(self) -> None:
        placement = StaticPlacement.from_records(RECORDS)
        self.assertEqual(placement.place([], PlacementMode.AUTOMATIC), [])


class JsonFilePlacementTests(unittest.TestCase):
    def test_reads_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "layout.json"
            path.write_text(json.dumps({"words": RECORDS}), encoding="utf-8")
            placed = JsonFilePlacement(path).place(["cat", "car"], PlacementMode.INPUT_ORDER)
            self.assertEqual([w.id for w in placed], [1, 2])

    def test_mode_keyed_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "layout.json"
            path.write_text(
                json.dumps({"InputOrder": RECORDS[:1], "Automatic": RECORDS}),
                encoding="utf-8",
            )
            placement = JsonFilePlacement(path)
            self.assertEqual(len(placement.place(["cat"], PlacementMode.INPUT_ORDER)), 1)
            self.assertEqual(len(placement.place(["cat"], PlacementMode.AUTOMATIC)), 2)

    def test_missing_file_raises_placement_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            placement = JsonFilePlacement(Path(tmpdir) / "absent.json")
            with self.assertRaises(PlacementError):
                placement.place(["cat"], PlacementMode.INPUT_ORDER)


class PlacementServiceClientTests(unittest.TestCase):
    def test_requires_url(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(PlacementServiceError):
                PlacementServiceClient()
            with self.assertRaises(PlacementError):
                PlacementServiceClient(base_url="")

    def test_reads_url_and_token_from_environment(self) -> None:
        env = {
            "CROSSGRID_PLACEMENT_URL": "http://placer.local/",
            "CROSSGRID_PLACEMENT_TOKEN": "secret",
        }
        with patch.dict("os.environ", env, clear=True):
            client = PlacementServiceClient()
        self.assertEqual(client.base_url, "http://placer.local")
        self.assertEqual(client._headers()["Authorization"], "Bearer secret")

    @patch("crossgrid.io.placement_client.requests.post")
    def test_posts_words_and_mode(self, post: MagicMock) -> None:
        response = MagicMock()
        response.json.return_value = {"words": RECORDS}
        post.return_value = response

        client = PlacementServiceClient(base_url="http://placer.local")
        placed = client.place(["cat", "car"], PlacementMode.AUTOMATIC)

        self.assertEqual(len(placed), 2)
        args, kwargs = post.call_args
        self.assertEqual(args[0], "http://placer.local/place")
        self.assertEqual(kwargs["json"], {"words": ["cat", "car"], "mode": "Automatic"})
        self.assertEqual(kwargs["timeout"], 30.0)

    @patch("crossgrid.io.placement_client.requests.post")
    def test_empty_input_skips_request(self, post: MagicMock) -> None:
        client = PlacementServiceClient(base_url="http://placer.local")
        self.assertEqual(client.place([], PlacementMode.INPUT_ORDER), [])
        post.assert_not_called()

    @patch("crossgrid.io.placement_client.requests.post")
    def test_transport_error_becomes_placement_error(self, post: MagicMock) -> None:
        post.side_effect = requests.ConnectionError("refused")
        client = PlacementServiceClient(base_url="http://placer.local")
        with self.assertRaises(PlacementServiceError):
            client.place(["cat"], PlacementMode.INPUT_ORDER)

    @patch("crossgrid.io.placement_client.requests.post")
    def test_error_status_becomes_placement_error(self, post: MagicMock) -> None:
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        post.return_value = response
        client = PlacementServiceClient(base_url="http://placer.local")
        with self.assertRaises(PlacementServiceError):
            client.place(["cat"], PlacementMode.INPUT_ORDER)
        response.json.assert_not_called()

    @patch("crossgrid.io.placement_client.requests.post")
    def test_error_status_drops_every_candidate(self, post: MagicMock) -> None:
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("503 Service Unavailable")
        post.return_value = response
        client = PlacementServiceClient(base_url="http://placer.local")
        with self.assertLogs("crossgrid.engine.pipeline", level="WARNING"):
            result = run_pass("cat feline\ndog loyal\n", PlacementMode.AUTOMATIC, client)
        self.assertEqual(result.dropped, ("cat", "dog"))
        self.assertEqual(result.clues, ())
        self.assertEqual(result.grid.bounds.area, 0)

    @patch("crossgrid.io.placement_client.requests.post")
    def test_non_json_body(self, post: MagicMock) -> None:
        response = MagicMock()
        response.json.side_effect = ValueError("no json")
        response.text = "<html>"
        post.return_value = response
        client = PlacementServiceClient(base_url="http://placer.local")
        with self.assertRaises(PlacementError):
            client.place(["cat"], PlacementMode.INPUT_ORDER)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
