# SPDX-License-Identifier: Apache-2.0
"""Contract documents (evidence envelopes, procedure plans, receipts) and the
checks that keep references between them consistent."""

__version__ = "0.1.0"
