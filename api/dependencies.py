"""
API dependencies - wire application services from the components built at startup.

The lifespan in `main` stores the shared, read-only components on
`app.state`; services are cheap and built per request around them.
"""
from fastapi import Depends, Request

from application.ports.audit_log import AuditLogPort
from application.ports.payment_gateway import OrderGateway
from application.services.callback_reconciler import CallbackReconciler
from application.services.order_service import OrderService
from application.services.payment_service import PaymentVerificationService
from core.settings import PaymentSettings
from domain.catalog import CourseCatalog
from domain.services.signature import SignatureVerifier


def get_catalog(request: Request) -> CourseCatalog:
    return request.app.state.catalog


def get_audit_log(request: Request) -> AuditLogPort:
    return request.app.state.audit_log


def get_gateway(request: Request) -> OrderGateway:
    return request.app.state.gateway


def get_signature_verifier(request: Request) -> SignatureVerifier:
    return request.app.state.signature_verifier


def get_payment_settings(request: Request) -> PaymentSettings:
    return request.app.state.payment_settings


async def get_order_service(
    catalog: CourseCatalog = Depends(get_catalog),
    gateway: OrderGateway = Depends(get_gateway),
    audit_log: AuditLogPort = Depends(get_audit_log),
    payment_settings: PaymentSettings = Depends(get_payment_settings),
) -> OrderService:
    return OrderService(catalog, gateway, audit_log, currency=payment_settings.currency)


async def get_verification_service(
    verifier: SignatureVerifier = Depends(get_signature_verifier),
) -> PaymentVerificationService:
    return PaymentVerificationService(verifier)


async def get_callback_reconciler(
    verifier: SignatureVerifier = Depends(get_signature_verifier),
    gateway: OrderGateway = Depends(get_gateway),
    audit_log: AuditLogPort = Depends(get_audit_log),
    payment_settings: PaymentSettings = Depends(get_payment_settings),
) -> CallbackReconciler:
    return CallbackReconciler(
        verifier,
        gateway,
        audit_log,
        success_url=payment_settings.callback.success_url,
        failure_url=payment_settings.callback.failure_url,
    )
