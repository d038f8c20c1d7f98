from deep_pockets.catalog import load_default_catalog
from deep_pockets.models import AmountDisplayType, BudgetCategory
from deep_pockets.search import fuzzy_match, search_categories, similarity, tokenize


def _sample_categories():
    def make(cid, name, description):
        return BudgetCategory(cid, name, '', description, 0.05, AmountDisplayType.MONTHLY)

    return [
        make('car', 'Car', 'Purchase price for your vehicle.'),
        make('groceries', 'Groceries', 'Food and household supplies.'),
        make('retirement_savings', 'Retirement Savings', 'Long term investing for later life.'),
        make('dining', 'Dining Out', 'Restaurants and takeout.'),
    ]


def _ids(results):
    return [c.id for c in results]


def test_tokenize():
    assert tokenize('Internet & Cable!') == ['internet', 'cable']
    assert tokenize('401k plan') == ['401k', 'plan']


def test_similarity():
    assert similarity('groceries', 'groceries') == 1.0
    assert similarity('grocerys', 'groceries') > 0.7


def test_blank_query_returns_everything():
    categories = _sample_categories()
    assert search_categories(categories, '') == categories
    assert search_categories(categories, '   ') == categories


def test_exact_word():
    assert _ids(search_categories(_sample_categories(), "vehicle")) == ["car"]


def test_keyword_association():
    categories = _sample_categories()
    assert _ids(search_categories(categories, 'auto')) == ['car']
    assert _ids(search_categories(categories, '401k')) == ['retirement_savings']


def test_prefix():
    assert _ids(search_categories(_sample_categories(), 'groc')) == ['groceries']


def test_typo():
    assert _ids(search_categories(_sample_categories(), 'grocerys')) == ['groceries']


def test_no_match():
    assert search_categories(_sample_categories(), 'xyzzy') == []


def test_fuzzy_match_empty_text():
    assert fuzzy_match('', 'Groceries') is False
    assert fuzzy_match('food', '') is False


def test_search_default_catalog_keeps_order():
    catalog = load_default_catalog()
    results = _ids(search_categories(catalog, 'insurance'))
    assert 'health_insurance' in results
    assert 'auto_insurance' in results
    assert results == [cid for cid in catalog.ids() if cid in results]
