"""
Tests for the pydantic models: wire format, validation and status rules.
"""

from datetime import date

import pydantic
import pytest

from rfp_reconciler.models import (
    ComparisonResult,
    ParseError,
    ProposalAnalysis,
    ProposalStatus,
    RequestItem,
    ScoreBreakdown,
    StructuredProposal,
    StructuredRequest,
    derive_status,
    eligible_for_comparison,
    rank_by_score,
    ranking_order,
)


class TestRequestModels:
    def test_camel_case_round_trip(self, sample_request):
        data = sample_request.model_dump(by_alias=True, mode='json')

        assert data['deliveryDeadline'] == '2026-02-09'
        assert data['paymentTerms'] == 'Net 30'
        assert data['items'][0]['estimatedUnitPrice'] == 1500
        assert StructuredRequest.model_validate(data) == sample_request

    def test_accepts_field_names(self):
        request = StructuredRequest(
            title='t', description='d', delivery_deadline=date(2026, 3, 1)
        )

        assert request.delivery_deadline == date(2026, 3, 1)

    def test_quantity_must_be_positive(self):
        with pytest.raises(pydantic.ValidationError):
            RequestItem(name='Laptops', quantity=0)

    def test_request_is_immutable(self, sample_request):
        with pytest.raises(pydantic.ValidationError):
            sample_request.budget = 1

    def test_item_defaults(self):
        item = RequestItem(name='Laptops', quantity=1)

        assert item.specification == 'As described'
        assert item.estimated_unit_price is None


class TestProposalStatus:
    def test_no_content_is_error(self):
        proposal = StructuredProposal.empty()

        assert derive_status(proposal) == ProposalStatus.ERROR
        assert proposal.status == ProposalStatus.ERROR

    def test_insufficient_data_is_incomplete(self):
        proposal = StructuredProposal(parse_error=ParseError.INSUFFICIENT_DATA)

        assert derive_status(proposal) == ProposalStatus.INCOMPLETE

    def test_not_complete_is_incomplete(self):
        assert derive_status(StructuredProposal(total_price=100)) == ProposalStatus.INCOMPLETE

    def test_complete_is_parsed(self):
        proposal = StructuredProposal(total_price=100, is_complete=True)

        assert derive_status(proposal) == ProposalStatus.PARSED

    def test_eligibility_filter(self):
        parsed = StructuredProposal(vendor_id='a', total_price=1, is_complete=True)
        incomplete = StructuredProposal(vendor_id='b', total_price=1)
        errored = StructuredProposal.empty(vendor_id='c')

        assert eligible_for_comparison([parsed, errored, incomplete]) == [parsed, incomplete]

    def test_empty_carries_ids(self):
        proposal = StructuredProposal.empty(request_id='rfp_1', vendor_id='v1')

        assert proposal.request_id == 'rfp_1'
        assert proposal.proposal_ref == 'v1'
        assert proposal.summary == 'Empty or invalid email content'

    def test_wire_format(self):
        data = StructuredProposal.empty().model_dump(by_alias=True, mode='json')

        assert data['parseError'] == 'NO_CONTENT'
        assert data['isComplete'] is False
        assert data['itemPrices'] == []
        assert data['terms'] == {
            'paymentTerms': None,
            'deliveryTerms': None,
            'additionalConditions': [],
        }


class TestComparisonModels:
    def test_breakdown_total(self):
        breakdown = ScoreBreakdown(price=30, delivery=20, warranty=10, terms=8, completeness=10)

        assert breakdown.total == 78

    @pytest.mark.parametrize(
        'field, value',
        [('price', 41), ('delivery', 26), ('warranty', 16), ('terms', 11), ('completeness', 11)],
    )
    def test_breakdown_caps(self, field, value):
        with pytest.raises(pydantic.ValidationError):
            ScoreBreakdown(**{field: value})

    def test_score_range(self):
        with pytest.raises(pydantic.ValidationError):
            ProposalAnalysis(proposal_ref='a', score=101)

    def test_rank_by_score_is_stable(self):
        analyses = [
            ProposalAnalysis(proposal_ref='a', score=50),
            ProposalAnalysis(proposal_ref='b', score=70),
            ProposalAnalysis(proposal_ref='c', score=50),
        ]

        ranked = rank_by_score(analyses)

        assert [(a.proposal_ref, a.rank) for a in ranked] == [('b', 1), ('a', 2), ('c', 3)]

    def test_ranking_order_matches_ranks(self):
        analyses = [
            ProposalAnalysis(proposal_ref='a', score=50),
            ProposalAnalysis(proposal_ref='b', score=70),
            ProposalAnalysis(proposal_ref='c', score=50),
            ProposalAnalysis(proposal_ref='d', score=90),
        ]

        order = ranking_order(analyses)

        assert order == [3, 1, 0, 2]
        assert [analyses[i].proposal_ref for i in order] == [
            a.proposal_ref for a in rank_by_score(analyses)
        ]

    def test_compliance_wire_value(self):
        result = ComparisonResult.model_validate(
            {
                'analysis': [
                    {
                        'proposalRef': 'a',
                        'score': 10,
                        'compliance': {'overallCompliance': 'NON-COMPLIANT'},
                    }
                ]
            }
        )

        dumped = result.model_dump(by_alias=True, mode='json')
        assert dumped['analysis'][0]['compliance']['overallCompliance'] == 'NON-COMPLIANT'
        assert dumped['source'] == 'rules'
