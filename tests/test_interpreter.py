"""
Tests for the rule-based request interpreter.
"""

from datetime import timedelta

import pytest

from rfp_reconciler.catalogs import EquipmentCategory, _ci
from rfp_reconciler.interpreter import RequestInterpreter


@pytest.fixture
def interpreter() -> RequestInterpreter:
    return RequestInterpreter(min_budget=100, default_item_price=1000)


class TestInterpret:
    """End-to-end interpretation of buyer descriptions."""

    def test_laptops_with_budget_and_deadline(self, interpreter, today):
        request = interpreter.interpret(
            'I need 20 laptops with 16GB RAM, budget $50,000, delivery in 30 days',
            today=today,
        )

        assert len(request.items) == 1
        item = request.items[0]
        assert item.name == 'Laptops'
        assert item.quantity == 20
        assert '16GB' in item.specification
        assert item.estimated_unit_price == 1500
        assert request.budget == 50000
        assert request.delivery_deadline == today + timedelta(days=30)

    def test_title_and_description(self, interpreter, today):
        text = '5 monitors please'
        request = interpreter.interpret(text, today=today)

        assert request.title == 'Equipment Procurement Request'
        assert request.description == text
        assert request.id is None
        assert request.requirements == {}

    def test_items_in_catalog_order(self, interpreter, today):
        request = interpreter.interpret(
            'We want 15 monitors, 10 office chairs and 4 standing desks', today=today
        )

        assert [i.name for i in request.items] == ['Office Chairs', 'Standing Desks', 'Monitors']
        assert [i.quantity for i in request.items] == [10, 4, 15]

    def test_fallback_item_uses_budget(self, interpreter, today):
        request = interpreter.interpret('Printer paper for the office, budget $2,500', today=today)

        assert len(request.items) == 1
        item = request.items[0]
        assert item.name == 'General Items'
        assert item.quantity == 1
        assert item.specification == 'As described'
        assert item.estimated_unit_price == 2500

    def test_fallback_item_uses_default_price(self, interpreter, today):
        request = interpreter.interpret('Something nice for the team', today=today)

        assert request.items[0].name == 'General Items'
        assert request.items[0].estimated_unit_price == 1000
        assert request.budget is None
        assert request.delivery_deadline is None
        assert request.payment_terms is None

    def test_empty_text_still_yields_request(self, interpreter, today):
        request = interpreter.interpret('', today=today)

        assert request.description == ''
        assert request.items[0].name == 'General Items'

    def test_zero_quantity_clamped(self, interpreter, today):
        request = interpreter.interpret('0 laptops', today=today)

        assert request.items[0].quantity == 1

    def test_deterministic(self, interpreter, today):
        text = '10 chairs (ergonomic) and 10 desk lamps with LED, budget $5,000, 14 days, net 30'
        assert interpreter.interpret(text, today=today) == interpreter.interpret(text, today=today)


class TestItems:
    """Category recognition and specification refinement."""

    def test_desk_lamps_not_standing_desks(self, interpreter):
        items = interpreter.extract_items('12 desk lamps')

        assert [i.name for i in items] == ['Desk Lamps']

    def test_laptop_bags_not_laptops(self, interpreter):
        items = interpreter.extract_items('30 laptop bags')

        assert [i.name for i in items] == ['Laptop Bags']

    def test_wireless_peripherals(self, interpreter):
        items = interpreter.extract_items('25 wireless mice and 25 wireless keyboards')

        assert [(i.name, i.quantity) for i in items] == [
            ('Wireless Mice', 25),
            ('Wireless Keyboards', 25),
        ]

    def test_first_mention_wins(self, interpreter):
        items = interpreter.extract_items('3 monitors now, 7 monitors later')

        assert items[0].quantity == 3

    def test_default_specification(self, interpreter):
        items = interpreter.extract_items('8 monitors')

        assert items[0].specification == '24-inch LCD'

    def test_ergonomic_qualifier(self, interpreter):
        items = interpreter.extract_items('10 chairs, ergonomic with lumbar support')

        assert items[0].specification == 'Ergonomic design with lumbar support'

    def test_led_qualifier(self, interpreter):
        items = interpreter.extract_items('6 lamps, LED only')

        assert items[0].specification == 'LED lighting'

    def test_i7_qualifier(self, interpreter):
        items = interpreter.extract_items('5 laptops with i7 CPUs')

        assert items[0].specification == '16GB RAM, Intel i7 processor'

    def test_qualifier_only_refines_its_category(self, interpreter):
        items = interpreter.extract_items('20 laptops with 16GB RAM and 20 monitors')

        by_name = {i.name: i.specification for i in items}
        assert by_name['Laptops'] == '16GB RAM, Intel i7 processor'
        assert by_name['Monitors'] == '24-inch LCD'

    def test_qualifier_outside_window_ignored(self, interpreter):
        text = '4 laptops' + ' ' * 150 + '16GB'

        items = interpreter.extract_items(text)

        assert items[0].specification == '16GB RAM, 512GB SSD'

    def test_qualifier_needs_word_boundary(self, interpreter):
        items = interpreter.extract_items('5 laptops, model xi7000')

        assert items[0].specification == '16GB RAM, 512GB SSD'

    def test_custom_catalog(self):
        interpreter = RequestInterpreter(
            categories=[
                EquipmentCategory('Projectors', _ci(r'(\d+)\s*projectors?\b'), 'HD', 600),
            ],
            qualifiers=[],
        )

        items = interpreter.extract_items('2 projectors and 20 laptops')

        assert [(i.name, i.quantity, i.estimated_unit_price) for i in items] == [
            ('Projectors', 2, 600),
        ]


class TestBudget:
    def test_budget_phrase(self, interpreter):
        assert interpreter.extract_budget('Our budget is $12,000 total') == 12000

    def test_budget_phrase_without_dollar(self, interpreter):
        assert interpreter.extract_budget('budget: 8000') == 8000

    def test_dollar_then_budget(self, interpreter):
        assert interpreter.extract_budget('We have a $9,500 budget') == 9500

    def test_bare_dollar_amount(self, interpreter):
        assert interpreter.extract_budget('Spend up to $4,200 on 10 chairs') == 4200

    def test_only_first_match_per_pattern(self, interpreter):
        assert interpreter.extract_budget('10 mice at $25 each, $7,000 overall') is None

    def test_small_budget_phrase_falls_through_to_dollar_amount(self, interpreter):
        assert interpreter.extract_budget('budget 50, spend $7,000') == 7000

    def test_threshold_is_exclusive(self, interpreter):
        assert interpreter.extract_budget('$100') is None

    def test_no_budget(self, interpreter):
        assert interpreter.extract_budget('20 laptops') is None

    def test_threshold_configurable(self):
        interpreter = RequestInterpreter(min_budget=5000)

        assert interpreter.extract_budget('$6,000 or at most $4,000') == 6000
        assert interpreter.extract_budget('$4,000 or at most $6,000') is None


class TestDeadlineAndTerms:
    def test_deadline(self, today):
        assert RequestInterpreter.extract_deadline('within 14 days', today) == today + timedelta(
            days=14
        )

    def test_single_day(self, today):
        assert RequestInterpreter.extract_deadline('in 1 day', today) == today + timedelta(days=1)

    def test_no_deadline(self, today):
        assert RequestInterpreter.extract_deadline('as soon as possible', today) is None

    def test_net_30_case_insensitive(self):
        assert RequestInterpreter.extract_payment_terms('payment NET 30 please') == 'Net 30'

    def test_other_terms_not_recognized(self):
        assert RequestInterpreter.extract_payment_terms('net 60') is None
