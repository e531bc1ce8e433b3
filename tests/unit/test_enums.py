from src.ds_common.enums import LedgerEventType, Outcome, Side, is_final_outcome


def test_outcome_wire_codes() -> None:
    assert Outcome.UNRESOLVED == 0
    assert Outcome.YES == 1
    assert Outcome.NO == 2


def test_is_final_outcome() -> None:
    assert is_final_outcome(1)
    assert is_final_outcome(2)
    assert not is_final_outcome(0)
    assert not is_final_outcome(3)
    assert not is_final_outcome(2**256 - 1)


def test_side_values() -> None:
    assert Side("YES") is Side.YES
    assert Side("NO") is Side.NO


def test_event_type_values_match_names() -> None:
    for member in LedgerEventType:
        assert member.value == member.name
