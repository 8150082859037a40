"""SAM Lambda handler shim."""

from __future__ import annotations

from apiserver.app import boot, make_lambda_handler

# Boot once per container; the store handle is reused across invocations.
lambda_handler = make_lambda_handler(boot())
