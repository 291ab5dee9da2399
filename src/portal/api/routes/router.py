from fastapi import APIRouter

from src.portal.api.routes import auth, data, estimates, invoices, messages, projects, share

portal_router = APIRouter(prefix="/portal")
portal_router.include_router(auth.router)
portal_router.include_router(share.router)
portal_router.include_router(data.router)
portal_router.include_router(estimates.router)
portal_router.include_router(invoices.router)
portal_router.include_router(projects.router)
portal_router.include_router(messages.router)
