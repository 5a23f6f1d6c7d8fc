"""Tests for command parsing, YAML profiles and directive validation."""

import pytest

from custom_build.config import (
    directives_from_dict,
    directives_to_commands,
    load_profile,
    option_to_list,
    parse_commands,
    validate_directives,
)
from custom_build.errors import InvalidDirectiveError
from custom_build.graph import DependencyGraph
from custom_build.models import BuildDirectives


def test_option_to_list():
    assert option_to_list("map, filter,,reduce") == ["map", "filter", "reduce"]
    assert option_to_list(["map", " filter "]) == ["map", "filter"]
    assert option_to_list(None) == []


def test_parse_commands():
    directives = parse_commands(["modern", "include=map,filter", "exclude=forEach", "minus=clone"])
    assert directives.modern
    assert directives.include == ["map", "filter"]
    assert directives.minus == ["forEach", "clone"]
    assert directives.commands == ["modern", "include=map,filter", "exclude=forEach", "minus=clone"]


def test_parse_commands_sorts_exports():
    directives = parse_commands(["exports=node,amd"])
    assert directives.exports == ["amd", "node"]
    assert parse_commands([]).exports is None


def test_parse_commands_keeps_iife_verbatim():
    directives = parse_commands(["iife=(function() {%output%}());"])
    assert directives.iife == "(function() {%output%}());"


def test_parse_commands_rejects_unknown_tokens():
    with pytest.raises(InvalidDirectiveError) as excinfo:
        parse_commands(["bogus"])
    assert excinfo.value.warnings == ["Invalid argument passed: bogus"]

    with pytest.raises(InvalidDirectiveError) as excinfo:
        parse_commands(["bogus", "template=*.jst"])
    assert str(excinfo.value) == "Invalid arguments passed: bogus, template=*.jst"
    assert excinfo.value.identifiers == ["bogus", "template=*.jst"]


def test_directives_to_commands():
    directives = BuildDirectives(include=["map"], legacy=True, iife="!%output%")
    assert directives_to_commands(directives) == ["legacy", "include=map", "iife=!%output%"]


def test_directives_from_dict():
    directives = directives_from_dict({"modern": 1, "include": "map, filter", "exports": ["node", "amd"]})
    assert directives.modern is True
    assert directives.include == ["map", "filter"]
    assert directives.exports == ["amd", "node"]
    assert directives.commands == ["modern", "exports=amd,node", "include=map,filter"]


def test_directives_from_dict_rejects_unknown_keys():
    with pytest.raises(InvalidDirectiveError) as excinfo:
        directives_from_dict({"include": "map", "debug": True, "commands": ["x"]})
    assert excinfo.value.identifiers == ["commands", "debug"]


def test_load_profile(tmp_path):
    profile = tmp_path / "build.yaml"
    profile.write_text("modern: true\ninclude:\n  - map\n  - filter\nminus: forEach\n")
    directives = load_profile(profile)
    assert directives.modern
    assert directives.include == ["map", "filter"]
    assert directives.minus == ["forEach"]


def test_load_empty_profile(tmp_path):
    profile = tmp_path / "empty.yaml"
    profile.write_text("")
    assert load_profile(profile) == BuildDirectives()


def test_load_profile_must_be_mapping(tmp_path):
    profile = tmp_path / "list.yaml"
    profile.write_text("- modern\n- legacy\n")
    with pytest.raises(InvalidDirectiveError) as excinfo:
        load_profile(profile)
    assert "must be a mapping" in str(excinfo.value)


def test_validate_accepts_good_directives():
    graph = DependencyGraph.default()
    directives = BuildDirectives(include=["collect", "arrays", "templateSettings", "none"], exports=["amd"])
    assert validate_directives(directives, graph) == []


def test_validate_combined_flags():
    graph = DependencyGraph.default()
    assert validate_directives(BuildDirectives(legacy=True, modern=True), graph) == [
        "The `legacy` and `modern` commands may not be combined.",
    ]
    assert validate_directives(BuildDirectives(legacy=True, mobile=True, modern=True), graph) == [
        "The `legacy`, `mobile`, and `modern` commands may not be combined.",
    ]


def test_validate_invalid_entries():
    graph = DependencyGraph.default()
    directives = BuildDirectives(
        include=["fooBar", "bazQux"],
        category=["bogus"],
        exports=["es6"],
        plus=["nope"],
    )
    assert validate_directives(directives, graph) == [
        "Invalid `category` entry passed: Bogus",
        "Invalid `exports` entry passed: es6",
        "Invalid `include` entries passed: fooBar, bazQux",
        "Invalid `plus` entry passed: nope",
    ]
