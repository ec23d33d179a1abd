"""Tests for image comparison result parsing."""

import base64

import pytest

from appium_vision.exceptions import MalformedResponseError
from appium_vision.model import (
    Point,
    Rect,
    parse_find_result,
    parse_match_result,
    parse_similarity_result,
)


@pytest.fixture
def match_payload():
    return {
        "points1": [{"x": 1, "y": 2}, {"x": 3, "y": 4}],
        "rect1": {"x": 0, "y": 0, "width": 100, "height": 50},
        "points2": [{"x": 11, "y": 12}, {"x": 13, "y": 14}],
        "rect2": {"x": 10, "y": 10, "width": 100, "height": 50},
        "totalCount": 40,
        "count": 2,
    }


class TestParseMatchResult:
    """Test matchFeatures reply validation."""

    def test_preserves_values(self, match_payload):
        result = parse_match_result(match_payload)

        assert result.points1 == [Point(1, 2), Point(3, 4)]
        assert result.rect2 == Rect(10, 10, 100, 50)
        assert result.total_count == 40
        assert result.count == 2
        assert result.visualization is None
        assert result.to_dict() == match_payload

    @pytest.mark.parametrize("field", ["points1", "rect1", "points2", "rect2", "totalCount", "count"])
    def test_missing_required_field(self, match_payload, field):
        del match_payload[field]

        with pytest.raises(MalformedResponseError) as exc_info:
            parse_match_result(match_payload)

        assert exc_info.value.missing == [field]

    def test_reports_every_missing_field(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_match_result({"count": 1})

        assert exc_info.value.missing == ["points1", "rect1", "points2", "rect2", "totalCount"]

    @pytest.mark.parametrize(
        "field,value",
        [("totalCount", "40"), ("count", 2.0), ("count", True), ("totalCount", -1), ("count", None)],
    )
    def test_counts_must_be_integers(self, match_payload, field, value):
        match_payload[field] = value

        with pytest.raises(MalformedResponseError, match=field):
            parse_match_result(match_payload)

    def test_count_cannot_exceed_total(self, match_payload):
        match_payload["count"] = 41

        with pytest.raises(MalformedResponseError, match="exceeds"):
            parse_match_result(match_payload)

    def test_partial_rect_round_trips_without_none_keys(self, match_payload):
        match_payload["rect1"] = {"x": 5}

        assert parse_match_result(match_payload).to_dict()["rect1"] == {"x": 5}

    def test_decodes_visualization(self, match_payload, png_bytes):
        match_payload["visualization"] = base64.b64encode(png_bytes).decode("ascii")

        result = parse_match_result(match_payload)

        assert result.visualization == png_bytes
        assert result.visualization_image().size == (8, 8)
        assert list(result.to_dict())[-1] == "visualization"

    def test_invalid_visualization(self, match_payload):
        match_payload["visualization"] = "not base64!!"

        with pytest.raises(MalformedResponseError):
            parse_match_result(match_payload)

    def test_rejects_non_object(self):
        with pytest.raises(MalformedResponseError):
            parse_match_result(["points1"])

    def test_partial_rect_is_not_defaulted(self, match_payload):
        match_payload["rect1"] = {"x": 5}

        result = parse_match_result(match_payload)

        assert result.rect1 == Rect(x=5, y=None, width=None, height=None)
        assert not result.rect1.is_complete


class TestParseFindResult:
    """Test matchTemplate reply validation."""

    def test_zero_occurrences_is_a_result(self):
        result = parse_find_result({"multiple": []})

        assert result.multiple == []
        assert result.rect is None
        assert result.score is None
        assert not result.found
        assert result.to_dict() == {"multiple": []}

    def test_keeps_server_rank_order(self):
        payload = {
            "rect": {"x": 50, "y": 50, "width": 10, "height": 10},
            "score": 0.7,
            "multiple": [
                {"rect": {"x": 50, "y": 50, "width": 10, "height": 10}, "score": 0.7},
                {"rect": {"x": 0, "y": 0, "width": 10, "height": 10}, "score": 0.99},
                {"rect": {"x": 20, "y": 20, "width": 10, "height": 10}, "score": 0.8},
            ],
        }

        result = parse_find_result(payload)

        assert [c.score for c in result.multiple] == [0.7, 0.99, 0.8]
        assert result.best.rect == Rect(50, 50, 10, 10)

    def test_single_match_reply_is_normalized(self):
        result = parse_find_result({"rect": {"x": 0, "y": 0, "width": 750, "height": 1334}, "score": 0.9})

        assert len(result.multiple) == 1
        assert result.multiple[0].rect == Rect(0, 0, 750, 1334)
        assert result.multiple[0].score == 0.9

    def test_empty_multiple_with_primary_rect_is_normalized(self):
        payload = {"rect": {"x": 1, "y": 2, "width": 3, "height": 4}, "score": 0.9, "multiple": []}

        result = parse_find_result(payload)

        assert result.found
        assert result.best.rect == Rect(1, 2, 3, 4)
        assert result.best.score == 0.9
        assert result.to_dict()["multiple"] == [
            {"rect": {"x": 1, "y": 2, "width": 3, "height": 4}, "score": 0.9}
        ]

    def test_to_dict_keeps_reported_keys_only(self):
        result = parse_find_result({"multiple": [{"rect": {"x": 1}}]})

        assert result.to_dict() == {"multiple": [{"rect": {"x": 1}}]}

    @pytest.mark.parametrize(
        "payload",
        [
            {"multiple": [{"rect": {}, "score": "0.9"}]},
            {"rect": {"x": 0}, "score": True, "multiple": []},
            {"multiple": [{"rect": {}, "score": [0.9]}]},
        ],
    )
    def test_scores_must_be_numbers(self, payload):
        with pytest.raises(MalformedResponseError, match="score"):
            parse_find_result(payload)

    def test_missing_multiple(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_find_result({"score": 0.5})

        assert exc_info.value.missing == ["multiple"]

    def test_multiple_must_be_a_list(self):
        with pytest.raises(MalformedResponseError):
            parse_find_result({"multiple": {"rect": {}}})

    def test_candidate_needs_rect(self):
        with pytest.raises(MalformedResponseError):
            parse_find_result({"multiple": [{"score": 0.5}]})

    def test_visualization_only_when_present(self, png_bytes):
        encoded = base64.b64encode(png_bytes).decode("ascii")

        plain = parse_find_result({"multiple": []})
        visual = parse_find_result({"multiple": [], "visualization": encoded})

        assert not plain.has_visualization
        assert visual.visualization == png_bytes

    def test_save_visualization(self, tmp_path, png_bytes):
        encoded = base64.b64encode(png_bytes).decode("ascii")
        result = parse_find_result({"multiple": [], "visualization": encoded})

        path = result.save_visualization(tmp_path / "find_result_visual.png")

        assert path.read_bytes() == png_bytes

    def test_save_without_visualization(self, tmp_path):
        with pytest.raises(ValueError):
            parse_find_result({"multiple": []}).save_visualization(tmp_path / "x.png")


class TestParseSimilarityResult:
    """Test getSimilarity reply validation."""

    def test_score_only(self):
        result = parse_similarity_result({"score": 0.8916058540344238})

        assert result.score == 0.8916058540344238
        assert result.to_dict() == {"score": 0.8916058540344238}

    def test_with_visualization(self, png_bytes):
        encoded = base64.b64encode(png_bytes).decode("ascii")

        result = parse_similarity_result({"score": 0.5, "visualization": encoded})

        assert list(result.to_dict()) == ["score", "visualization"]
        assert result.visualization

    def test_missing_score(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_similarity_result({"visualization": None})

        assert exc_info.value.missing == ["score"]

    @pytest.mark.parametrize("score", ["0.5", None, True])
    def test_score_must_be_a_number(self, score):
        with pytest.raises(MalformedResponseError):
            parse_similarity_result({"score": score})
