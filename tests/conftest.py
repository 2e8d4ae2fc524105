"""
Pytest Configuration and Fixtures

Shared fixtures for all tests. The generation client is always a fake; no
test talks to a real model.
"""

import copy
import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

from scriptgen.models import ReferenceImage
from scriptgen.services import GenerationClient

VISUAL_STYLE = "Pixar-style 3D animation, vibrant colors, soft textures"


class FakeClient(GenerationClient):
    """Generation client returning a canned response and recording calls."""

    def __init__(self, response: str = "", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.encoded: List[str] = []

    @property
    def model(self) -> str:
        return "fake-model"

    def encode_image(self, image: ReferenceImage) -> dict:
        self.encoded.append(image.name)
        return {"mime_type": image.mime_type, "name": image.name}

    async def generate_json(
        self,
        prompt: str,
        schema: dict,
        images: Sequence[Any] = (),
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        self.calls.append({
            "prompt": prompt,
            "schema": schema,
            "images": list(images),
            "temperature": temperature,
            "model": model,
        })
        if self.error is not None:
            raise self.error
        return self.response


def _character(name: str, role: str) -> Dict[str, str]:
    return {
        "name": name,
        "description": f"{name}, the {role} of the story.",
        "appearance": f"{name} has short black hair and a red scarf.",
        "personality": "Curious and brave",
        "voice_profile": "Tone: warm; Pitch: high; Speed: fast; Style: playful",
    }


def _scene(number: int, dialogue: str = "An: Look over there!") -> Dict[str, Any]:
    return {
        "sceneNumber": number,
        "setting": "Khu vườn sau nhà",
        "imagePrompt": f"{VISUAL_STYLE}. An, the hero of the story. Scene {number} in the garden.",
        "negativeImagePrompt": "deformed, blurry, extra limbs",
        "motionPrompt": {
            "character": "An, the hero of the story. An has short black hair and a red scarf.",
            "setting": "A sunny backyard garden full of sunflowers",
            "lighting": "Soft golden afternoon light",
            "action": "Pointing at a butterfly",
            "dialogue": dialogue,
            "camera_movement": "Slow dolly in",
            "sound_effects": "Birds chirping",
            "background_music": "Light, playful ukulele",
            "visuals_notes": "Nhấn mạnh biểu cảm ngạc nhiên",
            "negativeMotionPrompt": "shaky camera, flickering lights",
        },
    }


def build_payload(intro: int = 1, body: int = 2, outro: int = 1) -> Dict[str, Any]:
    """Build a valid model output with contiguous scene numbers."""
    numbers = iter(range(1, intro + body + outro + 1))
    return {
        "competitorAnalysis": {
            "structuralAnalysis": [
                {"phan_doan": "Mở đầu - Hook (0:00 - 0:25)", "mo_ta": "Giới thiệu nhân vật"},
                {"phan_doan": "Cao trào (0:25 - 2:00)", "mo_ta": "Xung đột chính"},
            ],
            "strengths": ["Hình ảnh đẹp"],
            "weaknesses": ["Kết thúc hụt hẫng"],
            "contentGaps": ["Góc nhìn 1", "Góc nhìn 2", "Góc nhìn 3"],
        },
        "optimizedScript": {
            "overview": {
                "tom_tat": "An khám phá khu vườn bí mật.",
                "boi_canh": "Một ngôi làng nhỏ ven sông",
                "ho_so_nhan_vat": [_character("An", "hero"), _character("Mum", "mother")],
                "tong_giong": "Ấm áp, hài hước",
                "phong_cach_hinh_anh": VISUAL_STYLE,
            },
            "seo": {
                "tieu_de": "Khu vườn bí mật của An",
                "tu_khoa_chinh": ["khu vườn", "hoạt hình"],
                "tu_khoa_phu": ["thiếu nhi", "phiêu lưu", "gia đình", "3D"],
                "tu_khoa_lien_quan": ["truyện cổ tích"],
            },
            "intro": [_scene(next(numbers)) for _ in range(intro)],
            "body": [_scene(next(numbers)) for _ in range(body)],
            "outro": [_scene(next(numbers)) for _ in range(outro)],
        },
        "suggestions": {
            "titles": [f"Tiêu đề {i}" for i in range(1, 6)],
            "thumbnailIdeas": [f"Thumbnail {i}" for i in range(1, 6)],
        },
    }


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def payload() -> Dict[str, Any]:
    """A valid model output with 4 scenes."""
    return build_payload()


@pytest.fixture
def payload_json(payload) -> str:
    return json.dumps(payload, ensure_ascii=False)


@pytest.fixture
def bible_dict(payload) -> Dict[str, Any]:
    """Series bible matching the sample payload's overview."""
    overview = payload["optimizedScript"]["overview"]
    return {
        "ho_so_nhan_vat": copy.deepcopy(overview["ho_so_nhan_vat"]),
        "phong_cach_hinh_anh": overview["phong_cach_hinh_anh"],
        "tong_giong": overview["tong_giong"],
        "boi_canh_chung": overview["boi_canh"],
    }


@pytest.fixture
def bible_json(bible_dict) -> str:
    return json.dumps(bible_dict, ensure_ascii=False)


@pytest.fixture
def last_scene_json(payload) -> str:
    return json.dumps(payload["optimizedScript"]["outro"][-1], ensure_ascii=False)


@pytest.fixture
def analysis_fields() -> Dict[str, Any]:
    """Keyword arguments for a valid AnalysisRequest."""
    return {
        "duration_minutes": 5,
        "genre": "3D animation for kids",
        "language": "Vietnamese",
        "voice": "Warm female narrator",
        "video_url": "https://www.youtube.com/watch?v=abc123",
        "competitive_angle": "Funnier, with a stronger ending",
    }


@pytest.fixture
def series_fields(bible_json, last_scene_json) -> Dict[str, Any]:
    """Keyword arguments for a valid SeriesRequest."""
    return {
        "duration_minutes": 3,
        "genre": "3D animation for kids",
        "language": "Vietnamese",
        "voice": "Warm female narrator",
        "bible_json": bible_json,
        "last_scene_json": last_scene_json,
        "episode_topic": "An finds a lost puppy",
    }


@pytest.fixture
def fake_client(payload_json) -> FakeClient:
    """Fake client answering with the sample payload."""
    return FakeClient(response=payload_json)
