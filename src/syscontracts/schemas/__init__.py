# SPDX-License-Identifier: Apache-2.0
"""Pydantic models for contract documents and their structural validator.

``models`` only pins down the fields the reference engine reads and keeps
every other key as an extra. ``contracts`` holds the full structural shape
of each document kind, checked by ``ContractValidator``.
"""

from .contracts import (  # noqa: F401
    AmbientPayloadContract,
    EnvelopeContract,
    MessageIntentContract,
    PackManifestContract,
    PlanContract,
    ReceiptContract,
    RunBundleContract,
    WeatherContract,
)
from .models import (  # noqa: F401
    Artifact,
    DocumentSet,
    EvidenceEnvelope,
    Finding,
    ProcedurePlan,
    Provenance,
    Receipt,
)
from .validator import ContractValidator, SchemaError, ValidationResult  # noqa: F401
