"""Tests for PipelineConfig and BlendMode."""

import dataclasses
import pytest
import tempfile
from pathlib import Path
import yaml

from defocus.core import PipelineConfig, BlendMode


class TestPipelineConfig:
    def test_default_config(self):
        cfg = PipelineConfig()
        assert cfg.max_separation_distance == 200.0
        assert cfg.blur_radius_base == 5
        assert cfg.blend_mode is BlendMode.ALPHA
        assert cfg.blur_enabled
        assert not cfg.use_fast_blur

    def test_frozen(self):
        cfg = PipelineConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.blur_radius_base = 3

    def test_blend_mode_from_string(self):
        cfg = PipelineConfig(blend_mode="Multiply")
        assert cfg.blend_mode is BlendMode.MULTIPLY

    def test_unknown_blend_mode(self):
        with pytest.raises(ValueError):
            PipelineConfig(blend_mode="screen")

    def test_separation_for(self):
        cfg = PipelineConfig(max_separation_distance=10.0)
        assert cfg.separation_for(0.0) == 0.0
        assert cfg.separation_for(0.5) == pytest.approx(5.0)
        assert cfg.separation_for(2.0) == pytest.approx(20.0)

    def test_blur_radius_for(self):
        cfg = PipelineConfig(blur_radius_base=5)
        assert cfg.blur_radius_for(0.0) == 0
        assert cfg.blur_radius_for(0.58) == 3
        assert cfg.blur_radius_for(1.0) == 5
        # clamped at both ends
        assert cfg.blur_radius_for(3.0) == 5
        assert cfg.blur_radius_for(-1.0) == 0

    def test_to_dict(self):
        d = PipelineConfig(blend_mode=BlendMode.ADDITIVE).to_dict()
        assert d["blend_mode"] == "additive"
        assert d["max_image_size"] == 512

    def test_from_dict(self):
        d = {"max_separation_distance": 50.0, "blend_mode": "additive", "use_fast_blur": True}
        cfg = PipelineConfig.from_dict(d)

        assert cfg.max_separation_distance == 50.0
        assert cfg.blend_mode is BlendMode.ADDITIVE
        assert cfg.use_fast_blur
        assert cfg.blur_radius_base == 5

    def test_dict_round_trip(self):
        cfg = PipelineConfig(blend_mode=BlendMode.MULTIPLY, blur_enabled=False)
        assert PipelineConfig.from_dict(cfg.to_dict()) == cfg

    def test_from_yaml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "pipeline.yaml"
            with open(path, "w") as f:
                yaml.dump({"blur_radius_base": 8, "blend_mode": "multiply"}, f)

            cfg = PipelineConfig.from_yaml(path)

            assert cfg.blur_radius_base == 8
            assert cfg.blend_mode is BlendMode.MULTIPLY

    def test_from_yaml_empty(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert PipelineConfig.from_yaml(path) == PipelineConfig()

    def test_from_yaml_unknown_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("blur_sigma: 3\n")
        with pytest.raises(TypeError):
            PipelineConfig.from_yaml(path)
