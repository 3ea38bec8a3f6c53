"""Unit tests for MediaPipeFaceMeshProvider with a fake Face Mesh graph."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import numpy as np
import pytest

import attention_engine.landmarks.mediapipe_provider as provider_module
from attention_engine.errors import DetectorInitializationError, FrameNotReadyError
from attention_engine.landmarks.mediapipe_provider import MediaPipeFaceMeshProvider
from attention_engine.utils.config_sections import FaceMeshConfig


class FakeFaceMesh:
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.frames = []
        self.closed = False
        self.landmarks = [SimpleNamespace(x=0.25, y=0.5, z=-0.1), SimpleNamespace(x=0.75, y=0.1, z=0.0)]
        FakeFaceMesh.instances.append(self)

    def process(self, rgb):
        self.frames.append(rgb)
        face = SimpleNamespace(landmark=self.landmarks)
        return SimpleNamespace(multi_face_landmarks=[face])

    def close(self):
        self.closed = True


class EmptyFaceMesh(FakeFaceMesh):
    def process(self, rgb):
        return SimpleNamespace(multi_face_landmarks=None)


def fake_face_mesh(face_mesh_cls):
    return lambda: SimpleNamespace(FaceMesh=face_mesh_cls)


@pytest.fixture()
def frame() -> np.ndarray:
    image = np.zeros((100, 200, 3), dtype=np.uint8)
    image[:, :, 0] = 255  # blue in BGR
    return image


def test_initialize_passes_config(monkeypatch: pytest.MonkeyPatch) -> None:
    FakeFaceMesh.instances = []
    monkeypatch.setattr(provider_module, "load_face_mesh_module", fake_face_mesh(FakeFaceMesh))
    provider = MediaPipeFaceMeshProvider(FaceMeshConfig(max_num_faces=2, refine_landmarks=True))

    asyncio.run(provider.initialize())
    asyncio.run(provider.initialize())

    assert provider.is_initialized
    assert len(FakeFaceMesh.instances) == 1
    kwargs = FakeFaceMesh.instances[0].kwargs
    assert kwargs["max_num_faces"] == 2
    assert kwargs["refine_landmarks"] is True
    assert kwargs["static_image_mode"] is False


def test_initialize_failure_is_fatal_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(**kwargs):
        raise RuntimeError("graph missing")

    monkeypatch.setattr(provider_module, "load_face_mesh_module", fake_face_mesh(broken))
    provider = MediaPipeFaceMeshProvider()

    with pytest.raises(DetectorInitializationError, match="graph missing"):
        asyncio.run(provider.initialize())
    assert not provider.is_initialized


def test_missing_mediapipe_is_fatal_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def not_installed():
        raise ImportError("No module named 'mediapipe'")

    monkeypatch.setattr(provider_module, "load_face_mesh_module", not_installed)
    provider = MediaPipeFaceMeshProvider()

    with pytest.raises(DetectorInitializationError, match="mediapipe"):
        asyncio.run(provider.initialize())


def test_estimate_faces_converts_to_mirrored_pixels(monkeypatch: pytest.MonkeyPatch, frame) -> None:
    monkeypatch.setattr(provider_module, "load_face_mesh_module", fake_face_mesh(FakeFaceMesh))
    provider = MediaPipeFaceMeshProvider(FaceMeshConfig(flip_horizontal=True))

    async def scenario():
        await provider.initialize()
        return await provider.estimate_faces(frame)

    faces = asyncio.run(scenario())

    assert len(faces) == 1
    first = faces[0].keypoints[0]
    assert first.x == pytest.approx(150.0)
    assert first.y == pytest.approx(50.0)
    assert first.z == pytest.approx(-20.0)
    # Graph received RGB
    processed = provider._face_mesh.frames[0]
    assert processed[0, 0, 2] == 255 and processed[0, 0, 0] == 0


def test_estimate_faces_without_flip(monkeypatch: pytest.MonkeyPatch, frame) -> None:
    monkeypatch.setattr(provider_module, "load_face_mesh_module", fake_face_mesh(FakeFaceMesh))
    provider = MediaPipeFaceMeshProvider(FaceMeshConfig(flip_horizontal=False))

    async def scenario():
        await provider.initialize()
        return await provider.estimate_faces(frame)

    faces = asyncio.run(scenario())

    assert faces[0].keypoints[0].x == pytest.approx(50.0)
    assert faces[0].keypoints[1].x == pytest.approx(150.0)


def test_no_detections_returns_empty_list(monkeypatch: pytest.MonkeyPatch, frame) -> None:
    monkeypatch.setattr(provider_module, "load_face_mesh_module", fake_face_mesh(EmptyFaceMesh))
    provider = MediaPipeFaceMeshProvider()

    async def scenario():
        await provider.initialize()
        return await provider.estimate_faces(frame)

    assert asyncio.run(scenario()) == []


def test_empty_frame_is_not_ready(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(provider_module, "load_face_mesh_module", fake_face_mesh(FakeFaceMesh))
    provider = MediaPipeFaceMeshProvider()

    async def scenario():
        await provider.initialize()
        await provider.estimate_faces(np.zeros((0, 0, 3), dtype=np.uint8))

    with pytest.raises(FrameNotReadyError):
        asyncio.run(scenario())


def test_estimate_before_initialize_raises(frame) -> None:
    provider = MediaPipeFaceMeshProvider()

    with pytest.raises(RuntimeError):
        asyncio.run(provider.estimate_faces(frame))


def test_close_releases_graph(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(provider_module, "load_face_mesh_module", fake_face_mesh(FakeFaceMesh))
    provider = MediaPipeFaceMeshProvider()
    asyncio.run(provider.initialize())
    graph = provider._face_mesh

    provider.close()
    provider.close()

    assert graph.closed
    assert not provider.is_initialized
