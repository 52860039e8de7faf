"""Tests for path addressing."""

from __future__ import annotations

from attrbind.path import AttributeName, ElementKeyInt, ElementKeyString, Path


class TestPath:
    def test_root_is_empty(self) -> None:
        path = Path()
        assert path.is_root()
        assert len(path) == 0
        assert str(path) == ""
        assert path.last is None

    def test_extend_does_not_modify_original(self) -> None:
        root = Path()
        child = root.attribute("servers")
        assert root.steps == ()
        assert child.steps == (AttributeName("servers"),)

    def test_shared_prefix_branches_independently(self) -> None:
        base = Path().attribute("servers").index(0)
        a = base.attribute("name")
        b = base.attribute("port")
        assert a != b
        assert a.parent == base
        assert b.parent == base

    def test_equality_compares_steps(self) -> None:
        assert Path().attribute("a").index(1) == Path((AttributeName("a"), ElementKeyInt(1)))
        assert Path().attribute("a") != Path().key("a")

    def test_str_renders_all_step_kinds(self) -> None:
        path = Path().attribute("servers").index(0).attribute("tags").key("env")
        assert str(path) == 'servers[0].tags["env"]'

    def test_extend_with_explicit_step(self) -> None:
        path = Path().extend(ElementKeyString("k"))
        assert path.last == ElementKeyString("k")
