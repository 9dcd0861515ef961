"""
Tests for the pipeline facade.

Uses the rule-based backend (or a FallbackBackend around an unconfigured
remote) so no network access is needed.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from rfp_reconciler.backends import FallbackBackend, RemoteBackend, RuleBasedBackend
from rfp_reconciler.errors import AIConfigError, InsufficientProposalsError, ValidationError
from rfp_reconciler.models import ParseError, ProposalStatus, StructuredProposal
from rfp_reconciler.pipeline import ProcurementPipeline, ProposalIngestResult


@pytest.fixture
def pipeline() -> ProcurementPipeline:
    return ProcurementPipeline(RuleBasedBackend())


@pytest.fixture
def unconfigured_pipeline() -> ProcurementPipeline:
    return ProcurementPipeline(FallbackBackend(RemoteBackend(None), RuleBasedBackend()))


class TestCreateRequest:
    @pytest.mark.asyncio
    async def test_create_request(self, pipeline, today):
        request = await pipeline.create_request(
            'I need 20 laptops with 16GB RAM, budget $50,000, delivery in 30 days', today=today
        )

        assert request.items[0].name == 'Laptops'
        assert request.delivery_deadline == today + timedelta(days=30)

    @pytest.mark.asyncio
    @pytest.mark.parametrize('description', ['', '   '])
    async def test_blank_description(self, pipeline, description):
        with pytest.raises(ValidationError):
            await pipeline.create_request(description)

    @pytest.mark.asyncio
    async def test_unconfigured_remote_surfaces(self, unconfigured_pipeline):
        with pytest.raises(AIConfigError):
            await unconfigured_pipeline.create_request('20 laptops')


class TestIngestReply:
    @pytest.mark.asyncio
    async def test_parsed_reply(self, pipeline, sample_request, reply_a, today):
        result = await pipeline.ingest_reply(
            reply_a,
            sample_request,
            vendor_id='vendor_a',
            sender='sales@vendor-a.example',
            subject='Re: RFP',
            today=today,
        )

        assert isinstance(result, ProposalIngestResult)
        assert result.status == ProposalStatus.PARSED
        assert result.proposal.vendor_id == 'vendor_a'
        assert result.proposal.request_id == 'rfp_001'
        assert result.sender == 'sales@vendor-a.example'
        assert 'extraction' in result.stage_timings
        assert result.processing_time_ms >= 0

    @pytest.mark.asyncio
    async def test_empty_reply_is_error_status(self, pipeline, sample_request):
        result = await pipeline.ingest_reply('  ', sample_request, vendor_id='vendor_x')

        assert result.status == ProposalStatus.ERROR
        assert result.proposal.parse_error == ParseError.NO_CONTENT
        assert result.proposal.vendor_id == 'vendor_x'

    @pytest.mark.asyncio
    async def test_reply_without_price_is_incomplete(self, pipeline, sample_request):
        result = await pipeline.ingest_reply(
            'We are reviewing your request.', sample_request, vendor_id='vendor_y'
        )

        assert result.status == ProposalStatus.INCOMPLETE
        assert result.proposal.parse_error == ParseError.INSUFFICIENT_DATA

    @pytest.mark.asyncio
    async def test_unconfigured_remote_never_blocks_extraction(
        self, unconfigured_pipeline, sample_request, reply_b, today
    ):
        result = await unconfigured_pipeline.ingest_reply(
            reply_b, sample_request, vendor_id='vendor_b', today=today
        )

        assert result.proposal.total_price == 32000

    @pytest.mark.asyncio
    async def test_to_dict(self, pipeline, sample_request, reply_b, today):
        result = await pipeline.ingest_reply(
            reply_b, sample_request, vendor_id='vendor_b', today=today
        )

        data = result.to_dict()

        assert data['status'] == 'PARSED'
        assert data['proposal']['vendorId'] == 'vendor_b'
        assert data['proposal']['totalPrice'] == 32000
        assert data['proposal']['deliveryDate'] == '2026-02-04'
        assert set(data) == {
            'proposal', 'status', 'sender', 'subject', 'processingTimeMs', 'stageTimings',
        }


class TestCompare:
    @pytest.mark.asyncio
    async def test_compare(self, pipeline, sample_request, reply_a, reply_b, today):
        a = await pipeline.ingest_reply(reply_a, sample_request, vendor_id='vendor_a', today=today)
        b = await pipeline.ingest_reply(reply_b, sample_request, vendor_id='vendor_b', today=today)

        result = await pipeline.compare(sample_request, [b.proposal, a.proposal])

        assert result.recommendation.recommended_proposal_ref == 'vendor_a'
        assert result.analysis[0].score == 86

    @pytest.mark.asyncio
    async def test_errored_proposals_excluded(self, pipeline, sample_request):
        proposals = [
            StructuredProposal(vendor_id='a', total_price=1000, is_complete=True),
            StructuredProposal.empty(vendor_id='b'),
        ]

        with pytest.raises(InsufficientProposalsError) as exc_info:
            await pipeline.compare(sample_request, proposals)

        assert exc_info.value.context == {'current_count': 1, 'received': 2}

    @pytest.mark.asyncio
    async def test_incomplete_proposals_are_eligible(self, pipeline, sample_request):
        proposals = [
            StructuredProposal(vendor_id='a', total_price=1000),
            StructuredProposal(vendor_id='b', parse_error=ParseError.INSUFFICIENT_DATA),
        ]

        result = await pipeline.compare(sample_request, proposals)

        assert len(result.analysis) == 2

    @pytest.mark.asyncio
    async def test_unconfigured_remote_surfaces(self, unconfigured_pipeline, sample_request):
        proposals = [
            StructuredProposal(vendor_id='a', total_price=1000),
            StructuredProposal(vendor_id='b', total_price=2000),
        ]

        with pytest.raises(AIConfigError):
            await unconfigured_pipeline.compare(sample_request, proposals)


class TestClose:
    @pytest.mark.asyncio
    async def test_closes_remote_client(self):
        client = MagicMock()
        client.close = AsyncMock()
        pipeline = ProcurementPipeline(FallbackBackend(RemoteBackend(client), RuleBasedBackend()))

        await pipeline.close()

        client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_without_client(self, unconfigured_pipeline, pipeline):
        await unconfigured_pipeline.close()
        await pipeline.close()
