"""Tests for the sprite store."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from svg_sprite_store.artifacts import ModuleArtifact, StylesheetArtifact
from svg_sprite_store.exceptions import InvalidConfigError, UnknownSpriteError
from svg_sprite_store.models.config import NameOptions
from svg_sprite_store.store import SpriteStore
from svg_sprite_store.utils.naming import get_hash_digest

HASHED = "img/icons.[hash:8].svg"


class TestRegistration:
    """Test registering icons in the store."""

    def test_get_sprite_reuses_instance(self, store):
        """Test one sprite exists per key."""
        sprite = store.get_sprite(HASHED)

        assert store.get_sprite(HASHED) is sprite
        assert HASHED in store
        assert len(store) == 1
        assert store.sprites == {HASHED: sprite}

    def test_register_icon_derives_name(self, store, square_icon):
        """Test the default template uses the file name and a content hash."""
        icon = store.register_icon(HASHED, "/src/icons/home.svg", square_icon)

        assert icon.name == f"icon-home-{get_hash_digest(square_icon, max_length=5)}"
        assert icon.symbol_name == icon.name
        assert store.get_sprite(HASHED).icons == {"/src/icons/home.svg": icon}

    def test_register_icon_with_options(self, store, square_icon):
        """Test a custom template with symbol prefix."""
        options = NameOptions(template="[name]", symbol_prefix="i-")

        icon = store.register_icon(HASHED, "/src/icons/home.svg?dark", square_icon, options)

        assert icon.name == "home"
        assert icon.symbol_name == "i-home"
        assert icon.identity == "/src/icons/home.svg?dark"

    def test_invalid_layout(self):
        """Test the layout is validated when the store is created."""
        with pytest.raises(InvalidConfigError):
            SpriteStore({"iconHeight": -5})

    def test_concurrent_registration_matches_serial(self, square_icon, tall_icon, wide_icon):
        """Test concurrent producers build the same sprite as a single one."""
        sources = [square_icon, tall_icon, wide_icon]
        icons = [(f"/icons/{i:02d}.svg", sources[i % 3]) for i in range(30)]

        serial = SpriteStore()
        for identity, content in icons:
            serial.register_icon(HASHED, identity, content)

        concurrent = SpriteStore()
        with ThreadPoolExecutor(max_workers=6) as executor:
            for identity, content in reversed(icons):
                executor.submit(concurrent.register_icon, HASHED, identity, content)

        assert serial.generate_all()[HASHED].content == concurrent.generate_all()[HASHED].content


class TestGeneration:
    """Test generating every sprite."""

    def test_scenario_layout(self, store, square_icon):
        """Test an icon registered later but sorting first is placed first."""
        store.register_icon("img/sprite.svg", "x", square_icon, NameOptions(template="[name]"))
        store.register_icon("img/sprite.svg", "a", square_icon, NameOptions(template="[name]"))

        content = store.generate_all()["img/sprite.svg"].content

        assert '<use id="a" xlink:href="#a" width="50" height="50" x="0" y="0"></use>' in content
        assert '<use id="x" xlink:href="#x" width="50" height="50" x="50" y="0"></use>' in content

    def test_generate_all_keys(self, store, square_icon):
        """Test one generation per sprite."""
        store.register_icon(HASHED, "/a.svg", square_icon)
        store.register_icon("img/logos.svg", "/b.svg", square_icon)

        generations = store.generate_all()

        assert sorted(generations) == ["img/icons.[hash:8].svg", "img/logos.svg"]
        assert all(generation.changed for generation in generations.values())
        assert store.generation(HASHED) is generations[HASHED]
        assert store.warnings == []

    def test_second_pass_unchanged(self, store, square_icon):
        """Test a pass without registrations changes nothing."""
        store.register_icon(HASHED, "/a.svg", square_icon)
        first = store.generate_all()[HASHED]

        second = store.generate_all()[HASHED]

        assert not second.changed
        assert second.resource_path == first.resource_path

    def test_warnings_are_per_pass(self, store, square_icon, no_dimensions_icon):
        """Test sprites without dimensions are reported for the pass only."""
        store.register_icon(HASHED, "/a.svg", square_icon)
        store.register_icon("img/broken.svg", "/b.svg", no_dimensions_icon)

        generations = store.generate_all()

        assert generations[HASHED].changed
        assert not generations["img/broken.svg"].changed
        assert len(store.warnings) == 1
        assert store.warnings[0].sprite_name == "broken"

    def test_generation_unknown_sprite(self, store):
        """Test asking for an unknown sprite."""
        with pytest.raises(UnknownSpriteError):
            store.generation("img/unknown.svg")


class TestRewriting:
    """Test path rewriting through the store."""

    def test_rewrite_paths(self, store, square_icon):
        """Test the placeholder of one sprite is replaced."""
        store.register_icon(HASHED, "/a.svg", square_icon)
        resource_path = store.generate_all()[HASHED].resource_path

        assert store.rewrite_paths(HASHED, f"{HASHED}#a") == f"{resource_path}#a"

    def test_rewrite_paths_unknown_sprite(self, store):
        """Test rewriting for an unknown sprite."""
        with pytest.raises(UnknownSpriteError) as exc_info:
            store.rewrite_paths("img/unknown.svg", "text")

        assert exc_info.value.details == {"sprite": "img/unknown.svg"}

    def test_rewrite_all(self, store, square_icon, tall_icon):
        """Test every sprite is rewritten in turn."""
        store.register_icon(HASHED, "/a.svg", square_icon)
        store.register_icon("img/other.[hash:6].svg", "/b.svg", tall_icon)
        generations = store.generate_all()

        text = store.rewrite_all("img/icons.[hash:8].svg img/other.[hash:6].svg")

        assert text == (
            f"{generations[HASHED].resource_path} "
            f"{generations['img/other.[hash:6].svg'].resource_path}"
        )

    def test_refresh_artifacts(self, store, square_icon):
        """Test artifacts follow their refresh policy."""
        store.register_icon(HASHED, "/a.svg", square_icon)
        resource_path = store.generate_all()[HASHED].resource_path
        store.generate_all()

        module = ModuleArtifact("app.js", f'"{HASHED}"')
        stylesheet = StylesheetArtifact("app.css", f"url({HASHED})")

        assert store.refresh_artifacts([module, stylesheet]) == 1
        assert module.text == f'"{HASHED}"'
        assert stylesheet.text == f"url({resource_path})"


class TestEmit:
    """Test writing sprites to disk."""

    def test_emit_changed_sprites(self, store, square_icon, tmp_path: Path):
        """Test changed sprites are written at their resource path."""
        store.register_icon(HASHED, "/a.svg", square_icon)
        generation = store.generate_all()[HASHED]

        written = store.emit(tmp_path)

        assert written == [tmp_path / generation.resource_path]
        assert written[0].read_text(encoding="utf-8") == generation.content

    def test_emit_skips_unchanged(self, store, square_icon, tmp_path: Path):
        """Test unchanged sprites are only written on request."""
        store.register_icon(HASHED, "/a.svg", square_icon)
        store.generate_all()
        store.generate_all()

        assert store.emit(tmp_path) == []
        assert len(store.emit(tmp_path, only_changed=False)) == 1

    def test_emit_skips_failed_sprites(self, store, no_dimensions_icon, tmp_path: Path):
        """Test sprites without content are never written."""
        store.register_icon("img/broken.svg", "/b.svg", no_dimensions_icon)
        store.generate_all()

        assert store.emit(tmp_path, only_changed=False) == []

    def test_emit_before_generation(self, store, square_icon, tmp_path: Path):
        """Test nothing is written before the first pass."""
        store.register_icon(HASHED, "/a.svg", square_icon)

        assert store.emit(tmp_path) == []
