import json

import pytest

from deep_pockets.catalog import FRAME_COLUMNS, CategoryCatalog, category_from_config, load_default_catalog
from deep_pockets.models import AmountDisplayType, Assumption, BudgetCategory, CategoryType


def _sample_seed():
    return {
        'version': 1,
        'categories': [
            {
                'id': 'rent',
                'name': 'Rent',
                'emoji': '🏢',
                'description': 'Monthly rent.',
                'allocation_percentage': 0.3,
                'display_type': 'monthly',
                'type': 'housing',
                'priority': 1,
            },
            {
                'id': 'loan',
                'name': 'Loan',
                'allocation_percentage': 0.05,
                'type': 'debt',
                'debt_interest_rate': 6.5,
                'assumptions': [
                    {'title': 'Term', 'value': '36', 'input_type': {'kind': 'text_field'}},
                ],
            },
        ],
    }


def test_default_catalog_shape():
    catalog = load_default_catalog()
    assert len(catalog) >= 50
    assert catalog.ids()[0] == 'home'
    assert 'emergency_savings' in catalog
    home = catalog.get('home')
    assert home.allocation_percentage == pytest.approx(0.28)
    assert home.display_type == AmountDisplayType.TOTAL
    assert [a.title for a in home.assumptions] == [
        'Down Payment', 'Interest Rate', 'Property Tax Rate', 'Loan Term',
    ]
    assert home.assumption('Property Tax Rate').value == 1.1
    assert home.assumption('Loan Term').value == 30.0


def test_default_catalog_ids_unique_and_allocations_bounded():
    catalog = load_default_catalog()
    assert len(set(catalog.ids())) == len(catalog)
    assert all(0 <= c.allocation_percentage <= 1 for c in catalog)


def test_catalogs_are_isolated():
    first = load_default_catalog()
    second = load_default_catalog()
    first.update_assumption('home', 'Down Payment', '35')
    first.set_recommended_amount('home', 123.0)
    assert second.get('home').assumption('Down Payment').value == 20.0
    assert second.get('home').recommended_amount == 0.0


def test_from_config_and_optional_fields():
    catalog = CategoryCatalog.from_config(_sample_seed())
    assert catalog.ids() == ['rent', 'loan']
    loan = catalog.get('loan')
    assert loan.type == CategoryType.DEBT
    assert loan.display_type == AmountDisplayType.MONTHLY
    assert loan.priority == 3
    assert loan.debt_interest_rate == 6.5
    assert loan.savings_goal is None
    assert loan.assumption('Term').value == 36.0


def test_load_default_catalog_from_path(tmp_path):
    path = tmp_path / 'seed.json'
    path.write_text(json.dumps(_sample_seed()), encoding='utf-8')
    assert load_default_catalog(path).ids() == ['rent', 'loan']


def test_duplicate_ids_rejected():
    category = BudgetCategory('x', 'X', '', '', 0.1, AmountDisplayType.MONTHLY)
    with pytest.raises(ValueError, match='Duplicate category id'):
        CategoryCatalog([category, category])


def test_duplicate_titles_rejected():
    with pytest.raises(ValueError, match='duplicate assumptions'):
        BudgetCategory(
            'x', 'X', '', '', 0.1, AmountDisplayType.MONTHLY,
            assumptions=[Assumption('Rate', 1.0), Assumption('Rate', 2.0)],
        )


def test_allocation_out_of_range_rejected():
    with pytest.raises(ValueError):
        BudgetCategory('x', 'X', '', '', 1.5, AmountDisplayType.MONTHLY)


def test_unknown_input_kind_rejected():
    raw = _sample_seed()['categories'][1]
    raw['assumptions'][0]['input_type'] = {'kind': 'dial'}
    with pytest.raises(ValueError, match='dial'):
        category_from_config(raw)


def test_unknown_ids_and_titles_are_no_ops():
    catalog = load_default_catalog()
    catalog.set_recommended_amount('nope', 10.0)
    assert catalog.get('nope') is None
    assert catalog.update_assumption('nope', 'Down Payment', '10') is False
    assert catalog.update_assumption('home', 'Nope', '10') is False


def test_update_assumption_clamps():
    catalog = load_default_catalog()
    assert catalog.update_assumption('home', 'Loan Term', '45')
    assert catalog.get('home').assumption('Loan Term').value == 30.0
    assert catalog.update_assumption('home', 'Down Payment', '120')
    assert catalog.get('home').assumption('Down Payment').value == 100.0


def test_apply_assumption_edits_counts_applied():
    catalog = load_default_catalog()
    applied = catalog.apply_assumption_edits({
        'home': [('Interest Rate', '6.5'), ('Loan Term', '15')],
        'car': {'Down Payment': '15'},
        'nope': [('Interest Rate', '1')],
    })
    assert applied == 3
    assert catalog.get('home').assumption('Interest Rate').value == 6.5
    assert catalog.get('home').assumption('Loan Term').value == 15.0
    assert catalog.get('car').assumption('Down Payment').value == 15.0


def test_type_groupings():
    catalog = load_default_catalog()
    assert 'credit_cards' in [c.id for c in catalog.debt_categories()]
    assert 'emergency_savings' in [c.id for c in catalog.savings_categories()]
    assert all(c.type == CategoryType.HOUSING for c in catalog.by_type(CategoryType.HOUSING))


def test_to_frame():
    catalog = load_default_catalog()
    df = catalog.to_frame()
    assert list(df.columns) == FRAME_COLUMNS
    assert len(df) == len(catalog)
    assert df.iloc[0]['id'] == 'home'
    assert df.iloc[0]['display_type'] == 'total'
