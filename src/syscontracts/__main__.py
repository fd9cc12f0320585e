# SPDX-License-Identifier: Apache-2.0
from syscontracts.cli import main

raise SystemExit(main())
