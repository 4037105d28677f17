"""EduFolio Backend.

University and program listings for prospective students, with enquiry
(lead) capture and a role-gated back office.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
