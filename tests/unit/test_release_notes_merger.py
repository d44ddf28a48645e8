"""Unit tests for merging pull request release notes into a draft release body."""

import re

import pytest

from release_notes_updater.release_notes.merger import merge, merge_release_notes
from release_notes_updater.release_notes.parser import extract_release_notes_fragment, parse_document

PULL_REQUEST_PREAMBLE = """
## Описание
Какое-то описание Pull Request

## Изменения
Какие-то изменения Pull Request

"""


def test_merge_into_existing_sections_external_author() -> None:
    """Test merging notes into sections that all exist in the draft release."""
    release_body = """
## Новые компоненты
- Новый компонент с название COMPONENT

## Улучшения
- [ChipsSelect](https://vkcom.github.io/VKUI/6.3.0/#/ChipsSelect): Улучшение компонента ChipsSelect (#7023)

## Исправления
- [List](https://vkcom.github.io/VKUI/6.3.0/#/List): Исправление компонента List (#7094)

## Зависимости
- Обновлена какая-то зависимость 1

## Документация
- CustomScrollView: Обновлена документация CustomScrollView"""
    pull_request_body = (
        PULL_REQUEST_PREAMBLE
        + """## Release notes
## Новые компоненты
- Новый компонент с название COMPONENT2
Картинка с новым компонентом
Какая-то доп информация
- Новый компонент с название COMPONENT3

## Улучшения
- [ChipsSelect](https://vkcom.github.io/VKUI/6.3.0/#/ChipsSelect): Улучшение компонента ChipsSelect 2
Немного подробнее об этом. Можно приложить картинку
- ChipsInput: Улучшение компонента ChipsInput

## Исправления
- [Flex](https://vkcom.github.io/VKUI/6.3.0/#/Flex): Исправление компонента Flex
- [List](https://vkcom.github.io/VKUI/6.3.0/#/List): Исправление компонента List 2

## Зависимости
- Обновлена какая-то зависимость 2

## Документация
- Поправлены баги в документации
"""
    )
    expected = (
        "\n"
        "## Новые компоненты\r\n"
        "- Новый компонент с название COMPONENT\r\n"
        "- Новый компонент с название COMPONENT2 (#1234, спасибо @other)\r\n"
        "Картинка с новым компонентом\r\n"
        "Какая-то доп информация\r\n"
        "- Новый компонент с название COMPONENT3 (#1234, спасибо @other)\r\n"
        "\r\n"
        "## Улучшения\r\n"
        "- [ChipsSelect](https://vkcom.github.io/VKUI/6.6.0/#/ChipsSelect):\r\n"
        "  - Улучшение компонента ChipsSelect (#7023)\r\n"
        "  - Улучшение компонента ChipsSelect 2 (#1234, спасибо @other)\r\n"
        "Немного подробнее об этом. Можно приложить картинку\r\n"
        "- [ChipsInput](https://vkcom.github.io/VKUI/6.6.0/#/ChipsInput): Улучшение компонента ChipsInput (#1234, спасибо @other)\r\n"
        "\r\n"
        "## Исправления\r\n"
        "- [List](https://vkcom.github.io/VKUI/6.6.0/#/List):\r\n"
        "  - Исправление компонента List (#7094)\r\n"
        "  - Исправление компонента List 2 (#1234, спасибо @other)\r\n"
        "- [Flex](https://vkcom.github.io/VKUI/6.6.0/#/Flex): Исправление компонента Flex (#1234, спасибо @other)\r\n"
        "\r\n"
        "## Зависимости\r\n"
        "- Обновлена какая-то зависимость 1\r\n"
        "- Обновлена какая-то зависимость 2 (#1234, спасибо @other)\r\n"
        "\r\n"
        "## Документация\r\n"
        "- [CustomScrollView](https://vkcom.github.io/VKUI/6.6.0/#/CustomScrollView): Обновлена документация CustomScrollView\r\n"
        "- Поправлены баги в документации (#1234, спасибо @other)\r\n"
        "\r\n"
    )

    merged = merge(
        release_body,
        extract_release_notes_fragment(pull_request_body),
        version="6.6.0",
        pr_number=1234,
        author_login="other",
        is_external_author=True,
    )

    assert merged == expected


def test_merge_appends_sections_missing_from_release() -> None:
    """Test that sections the draft does not have yet are appended in pull request order."""
    release_body = """
## Новые компоненты
- Новый компонент с название COMPONENT

## Исправления
- [List](https://vkcom.github.io/VKUI/6.3.0/#/List): Исправление компонента List (#7094)

## Документация
- [CustomScrollView](https://vkcom.github.io/VKUI/6.5.0/#/CustomScrollView): Обновлена документация CustomScrollView"""
    pull_request_body = (
        PULL_REQUEST_PREAMBLE
        + """## Release notes
## Новые компоненты
- Новый компонент с название COMPONENT2
- Новый компонент с название COMPONENT3

## Улучшения
- [ChipsSelect](https://vkcom.github.io/VKUI/6.3.0/#/ChipsSelect): Улучшение компонента ChipsSelect 2
- [ChipsInput](https://vkcom.github.io/VKUI/6.3.0/#/ChipsInput): Улучшение компонента ChipsInput

## Исправления
- [Flex](https://vkcom.github.io/VKUI/6.3.0/#/Flex): Исправление компонента Flex
- [List](https://vkcom.github.io/VKUI/6.3.0/#/List): Исправление компонента List 2

## Зависимости
- Обновлена какая-то зависимость 2

## Документация
- Поправлены баги в документации
"""
    )
    expected = (
        "\n"
        "## Новые компоненты\r\n"
        "- Новый компонент с название COMPONENT\r\n"
        "- Новый компонент с название COMPONENT2 (#1234)\r\n"
        "- Новый компонент с название COMPONENT3 (#1234)\r\n"
        "\r\n"
        "## Исправления\r\n"
        "- [List](https://vkcom.github.io/VKUI/6.6.0/#/List):\r\n"
        "  - Исправление компонента List (#7094)\r\n"
        "  - Исправление компонента List 2 (#1234)\r\n"
        "- [Flex](https://vkcom.github.io/VKUI/6.6.0/#/Flex): Исправление компонента Flex (#1234)\r\n"
        "\r\n"
        "## Документация\r\n"
        "- [CustomScrollView](https://vkcom.github.io/VKUI/6.6.0/#/CustomScrollView): Обновлена документация CustomScrollView\r\n"
        "- Поправлены баги в документации (#1234)\r\n"
        "\r\n"
        "## Улучшения\r\n"
        "- [ChipsSelect](https://vkcom.github.io/VKUI/6.6.0/#/ChipsSelect): Улучшение компонента ChipsSelect 2 (#1234)\r\n"
        "- [ChipsInput](https://vkcom.github.io/VKUI/6.6.0/#/ChipsInput): Улучшение компонента ChipsInput (#1234)\r\n"
        "\r\n"
        "## Зависимости\r\n"
        "- Обновлена какая-то зависимость 2 (#1234)\r\n"
    )

    merged = merge(
        release_body,
        extract_release_notes_fragment(pull_request_body),
        version="6.6.0",
        pr_number=1234,
        author_login="eldar",
        is_external_author=False,
    )

    assert merged == expected


def test_merge_pull_request_without_release_notes() -> None:
    """Test that a pull request without release notes is listed in the fallback section."""
    release_body = """
## Новые компоненты
- Новый компонент с название COMPONENT

## Исправления
- [List](https://vkcom.github.io/VKUI/6.3.0/#/List): Исправление компонента List (#7094)

## Документация
- [CustomScrollView](https://vkcom.github.io/VKUI/6.5.0/#/CustomScrollView): Обновлена документация CustomScrollView
"""
    outcome = merge_release_notes(
        release_body,
        extract_release_notes_fragment(PULL_REQUEST_PREAMBLE),
        version="6.6.0",
        pr_number=1234,
        author_login="eldar",
        is_external_author=False,
    )

    assert outcome.used_fallback
    assert outcome.body == release_body + "\r\n## Нужно описать\r\n#1234"


@pytest.mark.parametrize(
    "fragment",
    [
        pytest.param(None, id="absent"),
        pytest.param("", id="empty"),
        pytest.param("  \n\n", id="whitespace"),
        pytest.param("Just some text without headings", id="no sections"),
    ],
)
def test_merge_fallback_for_fragments_without_sections(fragment: str | None) -> None:
    """Test that any fragment without sections takes the fallback path."""
    assert merge("## Fixes\n- one", fragment, "6.6.0", 42, "dev", False) == "## Fixes\n- one\r\n## Нужно описать\r\n#42"


def test_merge_widget_scenario() -> None:
    """Test that a new component note is appended after an unrelated existing item."""
    merged = merge(
        "## Новые компоненты\n- Component A",
        "## Новые компоненты\n- [Widget](https://docs/6.3.0/#/Widget): improved",
        version="6.6.0",
        pr_number=1234,
        author_login="eve",
        is_external_author=True,
    )
    assert merged == ("## Новые компоненты\r\n- Component A\r\n- [Widget](https://docs/6.6.0/#/Widget): improved (#1234, спасибо @eve)\r\n\r\n")


def test_merge_two_pull_requests_touching_same_component() -> None:
    """Test that sequential pull requests about one component produce two attributed sub-entries."""
    body = "## Исправления\n- [Flex](https://docs/6.5.0/#/Flex): Flex fix (#1)"
    body = merge(body, "## Исправления\n- [List](https://docs/6.5.0/#/List): first", "6.6.0", 10, "alice", False)
    body = merge(body, "## Исправления\n- [List](https://docs/6.5.0/#/List): second", "6.6.0", 11, "bob", True)

    list_item = parse_document(body).sections[0].items[1]
    assert [entry.text for entry in list_item.sub_entries] == ["first (#10)", "second (#11, спасибо @bob)"]
    assert body == (
        "## Исправления\r\n"
        "- [Flex](https://docs/6.6.0/#/Flex): Flex fix (#1)\r\n"
        "- [List](https://docs/6.6.0/#/List):\r\n"
        "  - first (#10)\r\n"
        "  - second (#11, спасибо @bob)\r\n"
        "\r\n"
    )


def test_merge_third_pull_request_appends_sub_entry() -> None:
    """Test that a third merge keeps prior sub-entries in order and appends the new one."""
    body = "## Fixes\n- [List](https://docs/6.5.0/#/List): one (#1)"
    for number, text in ((2, "two"), (3, "three")):
        body = merge(body, f"## Fixes\n- [List](https://docs/6.5.0/#/List): {text}", "6.6.0", number, "dev", False)
    item = parse_document(body).sections[0].items[0]
    assert [entry.text for entry in item.sub_entries] == ["one (#1)", "two (#2)", "three (#3)"]


def test_merge_is_idempotent_for_the_same_pull_request() -> None:
    """Test that running the merge twice for one pull request changes nothing the second time."""
    release_body = "## Fixes\n- [List](https://docs/6.5.0/#/List): Fixed List (#7094)\n- plain (#1)"
    fragment = "## Fixes\n- [List](https://docs/6.5.0/#/List): Fixed List 2\n- another plain\n\n## New\n- Thing"
    once = merge(release_body, fragment, "6.6.0", 1234, "dev", False)
    twice = merge(once, fragment, "6.6.0", 1234, "dev", False)
    # "New" was appended by the first run, so only the second run follows it with a separator.
    assert twice == once + "\r\n"
    assert parse_document(twice).sections == parse_document(once).sections


def test_merge_preserves_section_order() -> None:
    """Test that existing sections keep their order and new ones follow in pull request order."""
    release_body = "## B\n- b\n\n## A\n- a\n\n## C\n- c"
    fragment = "## Z\n- z\n\n## A\n- a2\n\n## Y\n- y"
    merged = merge(release_body, fragment, "1.0.0", 7, "dev", False)
    assert parse_document(merged).titles == ["B", "A", "C", "Z", "Y"]


def test_merge_never_attributes_published_content() -> None:
    """Test that only the new notes receive the attribution suffix."""
    merged = merge("## A\n- old note\n\n## B\n- untouched", "## A\n- new note", "1.0.0", 7, "dev", True)
    lines = merged.split("\r\n")
    assert "- old note" in lines
    assert "- untouched" in lines
    assert "- new note (#7, спасибо @dev)" in lines


def test_merge_rewrites_every_link_to_release_version() -> None:
    """Test that all component links point at the release version after a merge."""
    release_body = (
        "## A\n- [List](https://docs/6.3.0/#/List): list\n\n"
        "## B\n- [Flex](https://docs/5.0.0/#/Flex):\n  - one (#1)\n  - two (#2)\n- Panel: panel"
    )
    fragment = "## C\n- [Tabs](https://docs/6.4.0/#/Tabs): tabs"
    merged = merge(release_body, fragment, "6.6.0", 7, "dev", False)
    versions = set(re.findall(r"\]\((\S+?)/#/", merged))
    assert versions == {"https://docs/6.6.0", "https://vkcom.github.io/VKUI/6.6.0"}


def test_merge_reparses_fallback_section() -> None:
    """Test that a fallback section written earlier survives a later structured merge."""
    body = merge("## Fixes\n- one (#1)", None, "6.6.0", 2, "dev", False)
    body = merge(body, "## Fixes\n- three", "6.6.0", 3, "dev", False)
    assert body == "## Fixes\r\n- one (#1)\r\n- three (#3)\r\n\r\n## Нужно описать\r\n#2\r\n\r\n"


def test_merge_into_empty_release_body() -> None:
    """Test that a freshly created draft receives the pull request's sections."""
    merged = merge("", "## Fixes\n- one\n\n## Docs\n- two", "1.0.0", 5, "dev", False)
    assert merged == "## Fixes\r\n- one (#5)\r\n\r\n## Docs\r\n- two (#5)\r\n"


def test_merge_outcome_reports_new_sections() -> None:
    """Test that the merge outcome lists the sections it appended."""
    outcome = merge_release_notes("## A\n- a", "## B\n- b\n## A\n- a2\n## C\n- c", "1.0.0", 1, "dev", False)
    assert not outcome.used_fallback
    assert outcome.new_section_titles == ["B", "C"]


def test_merge_into_previously_merged_draft(draft_release_body: str) -> None:
    """Test merging into a draft body that already went through an earlier merge."""
    result = merge(
        draft_release_body,
        "## Исправления\n- Tabs: исправлен скролл\n",
        version="6.6.0",
        pr_number=12,
        author_login="eldar",
        is_external_author=False,
    )
    assert result == (
        "## Исправления\r\n"
        "- [Tabs](https://vkcom.github.io/VKUI/6.6.0/#/Tabs):\r\n"
        "  - поправлен фокус (#10)\r\n"
        "  - исправлен скролл (#12)\r\n"
        "\r\n"
        "## Документация\r\n"
        "- Обновлены примеры (#11)\r\n"
        "\r\n"
    )


def test_merge_incoming_sub_list_into_matching_component() -> None:
    """Test that notes written as a sub-list are all kept when the component already exists."""
    merged = merge(
        "## Fixes\n- [List](https://docs/6.5.0/#/List): old (#1)",
        "## Fixes\n- [List](https://docs/6.5.0/#/List):\n  - fix A\n  - fix B",
        "6.6.0",
        7,
        "dev",
        False,
    )
    assert merged == ("## Fixes\r\n- [List](https://docs/6.6.0/#/List):\r\n  - old (#1)\r\n  - fix A (#7)\r\n  - fix B (#7)\r\n\r\n")


def test_merge_incoming_sub_list_without_match() -> None:
    """Test that an unmatched sub-list item is appended with each note attributed."""
    merged = merge("## Fixes\n- x", "## Fixes\n- [List](https://docs/6.5.0/#/List):\n  - fix A\n  - fix B", "6.6.0", 7, "dev", False)
    assert merged == ("## Fixes\r\n- x\r\n- [List](https://docs/6.6.0/#/List):\r\n  - fix A (#7)\r\n  - fix B (#7)\r\n\r\n")


def test_merge_keeps_lead_lines_of_existing_section() -> None:
    """Test that prose under a heading the draft already has is carried over once."""
    once = merge("## Fixes\n- x", "## Fixes\nSome prose\n- y", "6.6.0", 7, "dev", False)
    assert once == "## Fixes\r\nSome prose\r\n- x\r\n- y (#7)\r\n\r\n"

    twice = merge(once, "## Fixes\nSome prose\n- y", "6.6.0", 7, "dev", False)
    assert parse_document(twice).sections[0].lead_lines == ("Some prose",)


def test_merge_prose_prefix_is_not_a_component() -> None:
    """Test that a capitalised prose word before a colon stays plain text."""
    merged = merge("## Fixes\n- x", "## Fixes\n- Note: see docs", "6.6.0", 7, "dev", False)
    assert merged == "## Fixes\r\n- x\r\n- Note: see docs (#7)\r\n\r\n"


def test_merge_collapses_repeated_component_items() -> None:
    """Test that a draft listing one component twice ends up with a single item for it."""
    merged = merge("## Fixes\n- List: a (#1)\n- Flex: f (#2)\n- List: b (#3)", "## Fixes\n- List: c", "6.6.0", 4, "dev", False)
    assert merged == (
        "## Fixes\r\n"
        "- [List](https://vkcom.github.io/VKUI/6.6.0/#/List):\r\n"
        "  - a (#1)\r\n"
        "  - b (#3)\r\n"
        "  - c (#4)\r\n"
        "- [Flex](https://vkcom.github.io/VKUI/6.6.0/#/Flex): f (#2)\r\n"
        "\r\n"
    )


def test_merge_keeps_documentation_host_of_each_link() -> None:
    """Test that links to different documentation hosts keep their host and only change version."""
    merged = merge(
        "## Fixes\n- [List](https://docs/6.5.0/#/List): a (#1)\n- [Flex](https://vkcom.github.io/VKUI/6.5.0/#/Flex): b (#2)",
        "## Fixes\n- Tabs: c",
        "6.6.0",
        3,
        "dev",
        False,
        docs_base_url="https://example.org/docs",
    )
    assert merged == (
        "## Fixes\r\n"
        "- [List](https://docs/6.6.0/#/List): a (#1)\r\n"
        "- [Flex](https://vkcom.github.io/VKUI/6.6.0/#/Flex): b (#2)\r\n"
        "- [Tabs](https://example.org/docs/6.6.0/#/Tabs): c (#3)\r\n"
        "\r\n"
    )
