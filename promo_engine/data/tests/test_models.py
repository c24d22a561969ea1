from datetime import date

import pytest
from pydantic import ValidationError

from promo_engine.data.models import ComboDraft, DetailLineDraft, NxMDraft, parse_draft


def test_promotion_is_immutable(make_promotion):
    promotion = make_promotion()
    with pytest.raises(ValidationError):
        promotion.discount_value = 50


def test_promotion_needs_at_least_one_line(make_promotion):
    with pytest.raises(ValidationError):
        make_promotion(lines=())


def test_record_excludes_id(make_promotion):
    record = make_promotion(promotion_id=7).to_record()
    assert "id" not in record
    assert record["denomination"] == "Test promo"


def test_references(make_promotion):
    promotion = make_promotion(lines=((1, 2), (3, 1)))
    assert promotion.references(3)
    assert not promotion.references(2)
    assert promotion.item_ids() == [1, 3]


def test_minimum_quantity_is_derived_not_settable():
    draft = ComboDraft(detail_lines=[DetailLineDraft(item_id=1, quantity=2), DetailLineDraft(item_id=2, quantity=3)])
    assert draft.minimum_quantity == 5
    assert draft.model_dump()["minimum_quantity"] == 5


def test_parse_draft_from_form_data():
    draft = parse_draft({
        "kind": "NXM",
        "denomination": "2x1 drinks",
        "valid_from_date": date(2024, 3, 1),
        "valid_until_date": "2024-03-31",
        "buy": 2,
        "pay": 1,
        "eligible_item_ids": [3],
    })
    assert isinstance(draft, NxMDraft)
    assert draft.valid_from_date == "2024-03-01"


def test_parse_draft_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        parse_draft({"kind": "BUNDLE"})
