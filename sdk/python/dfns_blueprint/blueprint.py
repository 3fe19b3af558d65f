"""
Blueprint hook surface.

BlueprintServiceManager carries every lifecycle hook the service framework
calls, each with a default body: notifications are no-ops, permission
queries are permissive. Concrete blueprints override only what they need.
Chain state that hooks would otherwise read implicitly is passed in
explicitly as a HookContext.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .core import derive_operator_address


@dataclass(frozen=True)
class HookContext:
    caller: bytes
    master_manager: bytes
    blueprint_id: int
    block_number: int = 0


class BlueprintServiceManager:
    # Operator lifecycle

    def on_register(self, ctx: HookContext, operator: bytes, registration_inputs: bytes) -> None:
        return None

    def on_unregister(self, ctx: HookContext, operator: bytes) -> None:
        return None

    def on_update_price_targets(self, ctx: HookContext, operator: bytes, price_targets: Any) -> None:
        return None

    # Service lifecycle

    def on_request(
        self,
        ctx: HookContext,
        request_id: int,
        requester: bytes,
        operators: Sequence[bytes],
        request_inputs: bytes,
    ) -> None:
        return None

    def on_approve(self, ctx: HookContext, operator: bytes, request_id: int, restaking_percent: int) -> None:
        return None

    def on_reject(self, ctx: HookContext, operator: bytes, request_id: int) -> None:
        return None

    def on_service_initialized(
        self,
        ctx: HookContext,
        request_id: int,
        service_id: int,
        owner: bytes,
        permitted_callers: Sequence[bytes],
        ttl: int,
    ) -> None:
        return None

    def on_service_termination(self, ctx: HookContext, service_id: int, owner: bytes) -> None:
        return None

    # Jobs

    def on_job_call(self, ctx: HookContext, service_id: int, job: int, call_id: int, inputs: bytes) -> None:
        return None

    def on_job_result(
        self,
        ctx: HookContext,
        service_id: int,
        job: int,
        call_id: int,
        operator: bytes,
        inputs: bytes,
        outputs: bytes,
    ) -> None:
        return None

    # Slashing

    def on_unapplied_slash(self, ctx: HookContext, service_id: int, offender: bytes, slash_percent: int) -> None:
        return None

    def on_slash(self, ctx: HookContext, service_id: int, offender: bytes, slash_percent: int) -> None:
        return None

    def query_slashing_origin(self, ctx: HookContext, service_id: int) -> bytes:
        return ctx.master_manager

    def query_dispute_origin(self, ctx: HookContext, service_id: int) -> bytes:
        return ctx.master_manager

    # Dynamic membership

    def can_join(self, ctx: HookContext, service_id: int, operator: bytes) -> bool:
        return True

    def on_operator_joined(self, ctx: HookContext, service_id: int, operator: bytes) -> None:
        return None

    def can_leave(self, ctx: HookContext, service_id: int, operator: bytes) -> bool:
        return True

    def on_operator_left(self, ctx: HookContext, service_id: int, operator: bytes) -> None:
        return None


class DfnsBlueprint(BlueprintServiceManager):
    """Pass-through blueprint: every hook keeps its default."""


class OperatorBlueprint(BlueprintServiceManager):
    """Default hooks plus operator address derivation for overriding hooks to use."""

    @staticmethod
    def operator_address_from_public_key(public_key: bytes) -> bytes:
        return derive_operator_address(public_key)
