"""Tests for feature parsing and feature file location."""
from __future__ import annotations

import textwrap

import pytest
from gherkin.errors import ParserError

from featurebridge.compiler import locate_features, parse_feature_file, parse_feature_text
from featurebridge.localisation import get_language


def _parse(text: str, lang: str = "default"):
    return parse_feature_text(textwrap.dedent(text).lstrip(), get_language(lang))


# ================================================================
# Features, scenarios, annotations
# ================================================================


def test_feature_with_tags_and_scenarios():
    [feature] = _parse("""
        @only @owner=alice
        Feature: Bottles
          A song about bottles

          @pending
          Scenario: Falling
            Given 100 green bottles are standing on the wall
            When 1 green bottle accidentally falls
            Then there are 99 green bottles standing on the wall

          Scenario: Standing
            Given 10 green bottles
    """)
    assert feature.title == "Bottles"
    assert feature.description == "A song about bottles"
    assert feature.annotations == {"only": True, "owner": "alice"}
    assert [s.title for s in feature.scenarios] == ["Falling", "Standing"]
    assert feature.scenarios[0].annotations == {"pending": True}
    assert feature.scenarios[1].annotations == {}
    assert feature.scenarios[0].steps == [
        "Given 100 green bottles are standing on the wall",
        "When 1 green bottle accidentally falls",
        "Then there are 99 green bottles standing on the wall",
    ]


def test_feature_annotations_are_not_copied_to_scenarios():
    [feature] = _parse("""
        @pending
        Feature: F
          Scenario: S
            Given a step
    """)
    assert feature.scenarios[0].annotations == {}


def test_background_steps_prefix_each_scenario():
    [feature] = _parse("""
        Feature: Shop
          Background:
            Given a logged in user

          Scenario: Browse
            When I browse

          Scenario: Buy
            When I buy
    """)
    assert [s.steps for s in feature.scenarios] == [
        ["Given a logged in user", "When I browse"],
        ["Given a logged in user", "When I buy"],
    ]


def test_rules_are_flattened_with_their_tags():
    [feature] = _parse("""
        Feature: Accounts
          Scenario: Top level
            Given a step

          @pending
          Rule: Overdrafts
            Scenario: Limit
              Given an overdraft
    """)
    assert [s.title for s in feature.scenarios] == ["Top level", "Limit"]
    assert feature.scenarios[1].annotations == {"pending": True}


def test_scenario_outline_expands_per_example_row():
    [feature] = _parse("""
        Feature: Cucumbers
          Scenario Outline: eating
            Given there are <start> cucumbers
            When I eat <eat> cucumbers

            @only
            Examples:
              | start | eat |
              | 12    | 5   |
              | 20    | 5   |
    """)
    assert [s.title for s in feature.scenarios] == ["eating (12, 5)", "eating (20, 5)"]
    assert feature.scenarios[1].steps == ["Given there are 20 cucumbers", "When I eat 5 cucumbers"]
    assert all(s.annotations == {"only": True} for s in feature.scenarios)


def test_outline_title_placeholders_are_substituted():
    [feature] = _parse("""
        Feature: Users
          Scenario Outline: login as <role>
            Given a <role>

            Examples:
              | role  |
              | admin |
    """)
    assert feature.scenarios[0].title == "login as admin"


def test_doc_string_and_table_follow_step_line():
    [feature] = _parse('''
        Feature: Payloads
          Scenario: Post
            Given the payload
              """
              {"id": 1}
              """
            And the users
              | name  | age |
              | alice | 30  |
    ''')
    assert feature.scenarios[0].steps == [
        'Given the payload\n{"id": 1}',
        "And the users\n| name | age |\n| alice | 30 |",
    ]


def test_localised_keywords():
    [feature] = _parse("""
        Fonctionnalité: Bouteilles
          @seulement
          Scénario: Chute
            Soit 100 bouteilles
    """, lang="French")
    assert feature.title == "Bouteilles"
    assert feature.scenarios[0].annotations == {"seulement": True}
    assert feature.scenarios[0].steps == ["Soit 100 bouteilles"]


def test_empty_document_has_no_features():
    assert _parse("# just a comment\n") == []


def test_malformed_feature_propagates_parser_error():
    with pytest.raises(ParserError):
        _parse("""
            Feature: Broken
              Scenario: One
                Given a step
              Nonsense line that is not a step
            Feature: Second
        """)


def test_parse_file_records_path(tmp_path, english):
    path = tmp_path / "x.feature"
    path.write_text("Feature: X\n  Scenario: Y\n    Given z\n", encoding="utf-8")
    [feature] = parse_feature_file(path, english)
    assert feature.path == path


# ================================================================
# locate_features
# ================================================================


def test_directory_is_searched_recursively(tmp_path):
    (tmp_path / "nested").mkdir()
    for rel in ("b.feature", "nested/a.feature", "nested/c.spec", "notes.txt"):
        (tmp_path / rel).write_text("", encoding="utf-8")
    assert locate_features(tmp_path) == [
        tmp_path / "b.feature",
        tmp_path / "nested" / "a.feature",
        tmp_path / "nested" / "c.spec",
    ]


def test_file_is_treated_as_single_feature(tmp_path):
    path = tmp_path / "only.feature"
    path.write_text("", encoding="utf-8")
    assert locate_features(path) == [path]


def test_missing_resource_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        locate_features(tmp_path / "missing")
