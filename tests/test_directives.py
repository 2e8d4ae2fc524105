"""Tests for directive assembly."""

import pytest

from scriptgen.agents.directives import (
    ANIMATED_STYLE_EXAMPLE,
    REALISTIC_STYLE_EXAMPLE,
    build_analysis_prompt,
    build_directive,
    build_series_prompt,
)
from scriptgen.budget import scene_budget
from scriptgen.errors import RequestError
from scriptgen.models import AnalysisRequest, GenerationPayload, ReferenceImage, SeriesRequest


class TestAnalysisPrompt:
    """Tests for the fresh analysis prompt."""

    def test_includes_inputs(self, analysis_fields):
        request = AnalysisRequest(**analysis_fields)
        prompt = build_analysis_prompt(request, scene_budget(5))

        assert "https://www.youtube.com/watch?v=abc123" in prompt
        assert '"Funnier, with a stronger ending"' in prompt
        assert "Warm female narrator" in prompt
        assert "5 minutes" in prompt

    def test_scene_budget(self, analysis_fields):
        request = AnalysisRequest(**analysis_fields)
        prompt = build_analysis_prompt(request, scene_budget(5))
        assert "between 30 and 45 scenes, aiming for 38" in prompt

    def test_optional_inputs_omitted(self, analysis_fields):
        request = AnalysisRequest(**analysis_fields)
        prompt = build_analysis_prompt(request, scene_budget(5))

        assert "My own video/channel" not in prompt
        assert "attached reference image" not in prompt
        assert "TARGET SEO KEYWORDS" not in prompt
        assert "Suggested keywords" not in prompt

    def test_optional_inputs_included(self, analysis_fields):
        request = AnalysisRequest(
            **analysis_fields,
            channel_url="https://www.youtube.com/@mine",
            reference_images=[ReferenceImage(data=b"x", mime_type="image/png")],
            target_keywords=["khu vườn", "hoạt hình"],
            suggested_keywords=["thiếu nhi"],
        )
        prompt = build_analysis_prompt(request, scene_budget(5))

        assert "https://www.youtube.com/@mine" in prompt
        assert "1 attached reference image(s)" in prompt
        assert "khu vườn, hoạt hình" in prompt
        assert "thiếu nhi" in prompt

    @pytest.mark.parametrize("genre", ["3D animation", "Hoạt hình 3d", "Kids 3D cartoon"])
    def test_animated_style_for_3d_genres(self, analysis_fields, genre):
        analysis_fields["genre"] = genre
        prompt = build_analysis_prompt(AnalysisRequest(**analysis_fields), scene_budget(5))

        assert ANIMATED_STYLE_EXAMPLE in prompt
        assert REALISTIC_STYLE_EXAMPLE not in prompt

    def test_realistic_style_otherwise(self, analysis_fields):
        analysis_fields["genre"] = "True crime documentary"
        prompt = build_analysis_prompt(AnalysisRequest(**analysis_fields), scene_budget(5))

        assert REALISTIC_STYLE_EXAMPLE in prompt
        assert ANIMATED_STYLE_EXAMPLE not in prompt

    def test_dialogue_language(self, analysis_fields):
        analysis_fields["language"] = "Japanese"
        prompt = build_analysis_prompt(AnalysisRequest(**analysis_fields), scene_budget(5))
        assert "written ONLY in Japanese" in prompt


class TestSeriesPrompt:
    """Tests for the series continuation prompt."""

    def test_embeds_continuity_inputs(self, series_fields):
        request = SeriesRequest(**series_fields)
        prompt = build_series_prompt(request, scene_budget(3))

        assert series_fields["bible_json"] in prompt
        assert series_fields["last_scene_json"] in prompt
        assert '"An finds a lost puppy"' in prompt

    def test_requests_placeholder_analysis(self, series_fields):
        prompt = build_series_prompt(SeriesRequest(**series_fields), scene_budget(3))
        assert '"phan_doan":"N/A"' in prompt
        assert '"strengths":[]' in prompt

    def test_scene_budget(self, series_fields):
        prompt = build_series_prompt(SeriesRequest(**series_fields), scene_budget(3))
        assert "between 15 and 30 scenes, aiming for 23" in prompt


class TestBuildDirective:
    """Tests for build_directive."""

    def test_shared_output_schema(self, analysis_fields, series_fields):
        analysis = build_directive(AnalysisRequest(**analysis_fields), scene_budget(5))
        series = build_directive(SeriesRequest(**series_fields), scene_budget(3))

        assert analysis.schema == series.schema == GenerationPayload.response_schema()
        assert analysis.prompt != series.prompt

    def test_rejects_unknown_request(self):
        with pytest.raises(RequestError):
            build_directive({"mode": "analysis"}, scene_budget(5))
