from __future__ import annotations

import pytest

from mockbanker.descriptors import resolve_domain
from mockbanker.domain.models import GenerationOptions
from mockbanker.tab import CopyAll, CopyRow, Generate, SelectOption, SetCount, SetOptions, Tab, TabState


@pytest.fixture
def copied():
    return []


@pytest.fixture
def iban_tab(pipeline, copied) -> Tab:
    return Tab(resolve_domain("iban"), pipeline, copy=copied.append)


def test_initial_state_uses_descriptor_defaults(pipeline):
    tab = Tab(resolve_domain("tax_id"), pipeline)
    assert tab.state == TabState(domain="tax_id", selector="DE", count=5)


def test_messages_produce_new_states(iban_tab):
    before = iban_tab.state

    after = iban_tab.dispatch(SelectOption("NL"))

    assert before.selector is None
    assert after.selector == "NL"
    assert iban_tab.state is after


@pytest.mark.parametrize("requested,expected", [(0, 1), (250, 100), (12, 12)])
def test_set_count_clamps(iban_tab, requested, expected):
    assert iban_tab.dispatch(SetCount(requested)).count == expected


def test_generate_fills_rows_and_logs(iban_tab, history_log):
    iban_tab.dispatch(SelectOption("AT"))
    iban_tab.dispatch(SetCount(3))

    state = iban_tab.dispatch(Generate())

    assert len(state.rows) == 3
    assert all(row.raw.startswith("AT") for row in state.rows)
    assert history_log.load()[0].country_or_label == "AT"


def test_copy_row_marks_index_and_generation_resets_it(iban_tab, copied):
    iban_tab.dispatch(SetCount(2))
    iban_tab.dispatch(Generate())

    state = iban_tab.dispatch(CopyRow(1))
    assert state.copied_index == 1
    assert copied == [state.rows[1].formatted]

    state = iban_tab.dispatch(Generate())
    assert state.copied_index is None
    assert state.all_copied is False


def test_copy_row_out_of_range_is_ignored(iban_tab, copied):
    state = iban_tab.dispatch(CopyRow(4))
    assert state.copied_index is None
    assert copied == []


def test_copy_all_honours_spacing(iban_tab, copied):
    iban_tab.dispatch(SetOptions(GenerationOptions(spaces=False)))
    iban_tab.dispatch(SetCount(2))
    state = iban_tab.dispatch(Generate())

    state = iban_tab.dispatch(CopyAll())

    assert state.all_copied
    assert copied == ["\n".join(row.raw for row in state.rows)]


def test_export_uses_current_snapshot(iban_tab):
    iban_tab.dispatch(SetCount(4))
    iban_tab.dispatch(Generate())

    artifact = iban_tab.export("csv")

    assert artifact.filename == "ibans.csv"
    assert len(artifact.content.splitlines()) == 5


def test_unknown_message_is_rejected(iban_tab):
    with pytest.raises(TypeError):
        iban_tab.dispatch("generate")  # type: ignore[arg-type]
