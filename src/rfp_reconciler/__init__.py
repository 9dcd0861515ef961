"""
RFP Reconciler

Turns a buyer's free-text procurement need into a structured request,
reconciles vendor replies into structured proposals and ranks them, with
OpenAI-powered reasoning and a deterministic rule-based fallback.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import ProcurementPipeline, ProposalIngestResult
from .interpreter import RequestInterpreter
from .extractor import ProposalExtractor
from .evaluator import ProposalEvaluator
from .backends import (
    FallbackBackend,
    ReconcilerBackend,
    RemoteBackend,
    RuleBasedBackend,
    build_default_backend,
)
from .models import (
    ComparisonResult,
    ParseError,
    ProposalStatus,
    RequestItem,
    StructuredProposal,
    StructuredRequest,
)
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    ReconcilerError,
    PipelineError,
    ValidationError,
    InsufficientProposalsError,
    RemoteServiceError,
    AIConfigError,
    AIAuthError,
    RemoteResponseError,
)

__all__ = [
    # Version
    '__version__',
    # Pipeline
    'ProcurementPipeline',
    'ProposalIngestResult',
    # Rule-based components
    'RequestInterpreter',
    'ProposalExtractor',
    'ProposalEvaluator',
    # Backends
    'ReconcilerBackend',
    'RuleBasedBackend',
    'RemoteBackend',
    'FallbackBackend',
    'build_default_backend',
    # Models
    'StructuredRequest',
    'RequestItem',
    'StructuredProposal',
    'ParseError',
    'ProposalStatus',
    'ComparisonResult',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'ReconcilerError',
    'PipelineError',
    'ValidationError',
    'InsufficientProposalsError',
    'RemoteServiceError',
    'AIConfigError',
    'AIAuthError',
    'RemoteResponseError',
]
