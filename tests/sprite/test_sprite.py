"""Tests for sprite aggregation, packing and generation."""

import itertools
import threading

import pytest

from svg_sprite_store.exceptions import (
    IconNameCollisionError,
    InvalidConfigError,
    MissingDimensionsError,
    SvgParseError,
)
from svg_sprite_store.models.config import LayoutConfig
from svg_sprite_store.sprite.sprite import SvgSprite, sprite_name_from_path
from svg_sprite_store.utils.naming import interpolate_name


class TestSpriteName:
    """Test deriving the short sprite name from its path."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("img/sprite.svg", "sprite"),
            ("img/icons.[hash:8].svg", "icons"),
            ("[hash]-logos.svg", "logos"),
            ("img/[name].svg", "svg"),
        ],
    )
    def test_sprite_name_from_path(self, path, expected):
        """Test bracketed tokens are skipped."""
        assert sprite_name_from_path(path) == expected


class TestAddIcon:
    """Test registering icons."""

    def test_add_icon_increments_revision(self, sprite, square_icon):
        """Test every registration bumps the revision."""
        sprite.add_icon("/a.svg", "a", square_icon)
        sprite.add_icon("/b.svg", "b", square_icon)

        assert sprite.revision == 2
        assert len(sprite) == 2
        assert "/a.svg" in sprite
        assert sprite.dirty

    def test_same_identity_replaces(self, sprite, square_icon, tall_icon):
        """Test the last registration of an identity wins."""
        sprite.add_icon("/a.svg", "a", square_icon)
        sprite.add_icon("/a.svg", "a2", tall_icon)

        assert len(sprite) == 1
        assert sprite.icons["/a.svg"].content == tall_icon
        assert sprite.icons["/a.svg"].name == "a2"

    def test_replacement_with_new_content_warns(self, sprite, square_icon, tall_icon, caplog):
        """Test replacing an icon with different content is logged."""
        sprite.add_icon("/a.svg", "a", square_icon)
        with caplog.at_level("WARNING"):
            sprite.add_icon("/a.svg", "a", tall_icon)

        assert "Replacing icon /a.svg" in caplog.text

    def test_symbol_name_collision(self, sprite, square_icon):
        """Test two identities deriving the same symbol name are rejected."""
        sprite.add_icon("/a/home.svg", "home", square_icon)

        with pytest.raises(IconNameCollisionError) as exc_info:
            sprite.add_icon("/b/home.svg", "home", square_icon)

        assert exc_info.value.details["existing"] == "/a/home.svg"
        assert len(sprite) == 1

    def test_renamed_identity_releases_symbol_name(self, sprite, square_icon):
        """Test a replaced icon frees its previous symbol name."""
        sprite.add_icon("/a.svg", "first", square_icon)
        sprite.add_icon("/a.svg", "second", square_icon)
        sprite.add_icon("/b.svg", "first", square_icon)

        assert len(sprite) == 2

    def test_invalid_icon_is_not_added(self, sprite):
        """Test malformed content leaves the sprite untouched."""
        with pytest.raises(SvgParseError):
            sprite.add_icon("/bad.svg", "bad", "<svg")

        assert len(sprite) == 0
        assert sprite.revision == 0

    def test_concurrent_registration(self, sprite, square_icon):
        """Test registrations from many threads are all kept."""
        barrier = threading.Barrier(8)

        def register(index):
            barrier.wait()
            for n in range(10):
                sprite.add_icon(f"/{index}/{n}.svg", f"icon-{index}-{n}", square_icon)

        threads = [threading.Thread(target=register, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(sprite) == 80
        assert sprite.revision == 80


class TestRender:
    """Test packing icons into a document."""

    def test_document_order(self, sprite, gradient_icon):
        """Test definitions come first, then symbols, views and uses."""
        sprite.add_icon("/a.svg", "a", gradient_icon)

        content = sprite.render()

        assert content.startswith(
            '<svg xmlns="http://www.w3.org/2000/svg" '
            'xmlns:xlink="http://www.w3.org/1999/xlink"><defs><linearGradient id="aa">'
        )
        assert content.index("<linearGradient") < content.index("<symbol")
        assert content.index("</defs>") < content.index("<view")
        assert content.index("<view") < content.index("<use")
        assert content.endswith("</use></svg>")

    def test_icons_are_laid_out_in_identity_order(self, sprite, square_icon):
        """Test an icon registered later but sorting first takes the first slot."""
        sprite.add_icon("x", "x", square_icon)
        sprite.add_icon("a", "a", square_icon)

        content = sprite.render()

        assert '<use id="a" xlink:href="#a" width="50" height="50" x="0" y="0"></use>' in content
        assert '<use id="x" xlink:href="#x" width="50" height="50" x="50" y="0"></use>' in content
        assert '<view id="view-a" viewBox="0 0 50 50"></view>' in content
        assert '<view id="view-x" viewBox="50 0 50 50"></view>' in content

    def test_registration_order_does_not_matter(self, square_icon, tall_icon, wide_icon):
        """Test every registration order renders the same document."""
        icons = [("/a.svg", "a", square_icon), ("/b.svg", "b", tall_icon), ("/c.svg", "c", wide_icon)]
        rendered = set()

        for order in itertools.permutations(icons):
            sprite = SvgSprite("img/sprite.svg")
            for identity, name, content in order:
                sprite.add_icon(identity, name, content)
            rendered.add(sprite.render())

        assert len(rendered) == 1

    def test_irregular_widths_advance_by_whole_cells(self, sprite, tall_icon, wide_icon, square_icon):
        """Test the cursor moves by multiples of the icon height."""
        sprite.add_icon("/a.svg", "a", tall_icon)
        sprite.add_icon("/b.svg", "b", wide_icon)
        sprite.add_icon("/c.svg", "c", square_icon)

        content = sprite.render()

        assert '<use id="a" xlink:href="#a" width="37.5" height="50" x="0" y="0"></use>' in content
        assert '<use id="b" xlink:href="#b" width="100" height="50" x="50" y="0"></use>' in content
        assert '<use id="c" xlink:href="#c" width="50" height="50" x="150" y="0"></use>' in content

    def test_rows_wrap(self, sprite, square_icon):
        """Test icons continue on a new row once the row width is reached."""
        for name in ("a", "b", "c"):
            sprite.add_icon(f"/{name}.svg", name, square_icon)

        content = sprite.render({"rowWidth": 100})

        assert 'id="a" xlink:href="#a" width="50" height="50" x="0" y="0"' in content
        assert 'id="b" xlink:href="#b" width="50" height="50" x="50" y="0"' in content
        assert 'id="c" xlink:href="#c" width="50" height="50" x="0" y="50"' in content

    def test_offsets_and_gaps(self, sprite, square_icon):
        """Test start position and gaps are applied."""
        for name in ("a", "b", "c"):
            sprite.add_icon(f"/{name}.svg", name, square_icon)

        layout = LayoutConfig(start_x=10, start_y=5, delta_x=4, delta_y=6, row_width=110)
        content = sprite.render(layout)

        assert 'id="a" xlink:href="#a" width="50" height="50" x="10" y="5"' in content
        assert 'id="b" xlink:href="#b" width="50" height="50" x="64" y="5"' in content
        assert 'id="c" xlink:href="#c" width="50" height="50" x="10" y="61"' in content

    def test_custom_icon_height(self, sprite, tall_icon):
        """Test icons are scaled to the configured height."""
        sprite.add_icon("/a.svg", "a", tall_icon)

        content = sprite.render({"iconHeight": 64})

        assert 'width="48" height="64"' in content

    def test_missing_dimensions(self, sprite, no_dimensions_icon):
        """Test an icon without dimensions fails the render."""
        sprite.add_icon("/a.svg", "broken", no_dimensions_icon)

        with pytest.raises(MissingDimensionsError) as exc_info:
            sprite.render()

        assert exc_info.value.icon_name == "broken"
        assert exc_info.value.sprite_name == "sprite"

    def test_invalid_layout(self, sprite):
        """Test invalid layout options are rejected."""
        with pytest.raises(InvalidConfigError):
            sprite.render({"iconHeight": 0})

    def test_render_does_not_change_state(self, sprite, square_icon):
        """Test rendering alone leaves the sprite dirty."""
        sprite.add_icon("/a.svg", "a", square_icon)
        sprite.render()

        assert sprite.dirty
        assert sprite.content == ""


class TestGenerate:
    """Test generation and content-addressed paths."""

    def test_first_generation(self, hashed_sprite, square_icon):
        """Test the path is interpolated from the generated content."""
        hashed_sprite.add_icon("/a.svg", "a", square_icon)

        generation = hashed_sprite.generate()

        assert generation.changed
        assert generation.content == hashed_sprite.content
        assert generation.resource_path == interpolate_name(
            "img/icons.[hash:8].svg", generation.content
        )
        assert generation.original_resource_path == "img/icons.[hash:8].svg"
        assert generation.previous_resource_path is None
        assert generation.sprite_name == "icons"
        assert generation.has_hash
        assert not hashed_sprite.dirty

    def test_generate_is_idempotent(self, hashed_sprite, square_icon):
        """Test generating again without new icons changes nothing."""
        hashed_sprite.add_icon("/a.svg", "a", square_icon)
        first = hashed_sprite.generate()

        second = hashed_sprite.generate()

        assert not second.changed
        assert second.resource_path == first.resource_path
        assert second.content == first.content

    def test_reregistering_same_content_keeps_paths(self, hashed_sprite, square_icon):
        """Test an identical render reports no change."""
        hashed_sprite.add_icon("/a.svg", "a", square_icon)
        first = hashed_sprite.generate()
        hashed_sprite.add_icon("/a.svg", "a", square_icon)

        second = hashed_sprite.generate()

        assert not second.changed
        assert second.resource_path == first.resource_path
        assert second.previous_resource_path is None
        assert second.revision == 2

    def test_new_icon_moves_path(self, hashed_sprite, square_icon, tall_icon):
        """Test new content produces a new path and remembers the previous one."""
        hashed_sprite.add_icon("/a.svg", "a", square_icon)
        first = hashed_sprite.generate()
        hashed_sprite.add_icon("/b.svg", "b", tall_icon)

        second = hashed_sprite.generate()

        assert second.changed
        assert second.resource_path != first.resource_path
        assert second.previous_resource_path == first.resource_path

    def test_path_without_hash(self, sprite, square_icon):
        """Test a path without tokens is kept as declared."""
        sprite.add_icon("/a.svg", "a", square_icon)

        generation = sprite.generate()

        assert generation.resource_path == "img/sprite.svg"
        assert not generation.has_hash

    def test_failed_generation_keeps_state(self, hashed_sprite, square_icon, no_dimensions_icon):
        """Test a failing render leaves the previous content and keeps the sprite dirty."""
        hashed_sprite.add_icon("/a.svg", "a", square_icon)
        first = hashed_sprite.generate()
        hashed_sprite.add_icon("/b.svg", "b", no_dimensions_icon)

        with pytest.raises(MissingDimensionsError):
            hashed_sprite.generate()

        assert hashed_sprite.dirty
        assert hashed_sprite.content == first.content
        assert hashed_sprite.interpolated_path == first.resource_path

    def test_generation_rewriter(self, hashed_sprite, square_icon):
        """Test the snapshot builds a rewriter targeting the current path."""
        hashed_sprite.add_icon("/a.svg", "a", square_icon)
        generation = hashed_sprite.generate()

        rewriter = generation.rewriter()

        assert rewriter.rewrite("url(img/icons.[hash:8].svg#a)") == (
            f"url({generation.resource_path}#a)"
        )
