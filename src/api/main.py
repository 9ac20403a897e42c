"""
FastAPI backend: REST access to contacts with ETH address and ENS data.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ethcontacts.application import ContactService, CreateFailed
from ethcontacts.domain import Contact, InvalidWalletAddress
from ethcontacts.infrastructure import (
    JsonFilePreferenceStore,
    Neo4jContactSource,
    Settings,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def _build_service(app: FastAPI) -> ContactService:
    settings = _settings(app)
    if getattr(app.state, "driver", None) is None:
        app.state.driver = settings.neo4j_driver()
    source = Neo4jContactSource(app.state.driver)
    prefs = JsonFilePreferenceStore(settings.prefs_dir, settings.prefs_namespace)
    return ContactService(source, prefs)


def get_service(request: Request) -> ContactService:
    app = request.app
    if getattr(app.state, "service", None) is None:
        app.state.service = _build_service(app)
    return app.state.service


def _settings(app: FastAPI) -> Settings:
    if getattr(app.state, "settings", None) is None:
        app.state.settings = Settings.from_env()
    return app.state.settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    _settings(app)
    logger.info("Contacts API starting (prefs dir: %s)", app.state.settings.prefs_dir)
    try:
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()
            app.state.driver = None


app = FastAPI(title="ethcontacts API", lifespan=lifespan)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


class ContactItem(BaseModel):
    contact_id: str
    display_name: str
    phone_number: str | None = None
    email: str | None = None
    photo_uri: str | None = None
    eth_address: str | None = None
    ens_name: str | None = None
    has_eth_address: bool = False
    has_ens: bool = False


class CreateContactBody(BaseModel):
    display_name: str
    phone_number: str | None = None
    email: str | None = None
    eth_address: str | None = None
    ens_name: str | None = None


class EthAddressBody(BaseModel):
    address: str


class EnsNameBody(BaseModel):
    ens_name: str


def _to_item(c: Contact) -> ContactItem:
    return ContactItem(
        contact_id=c.contact_id,
        display_name=c.display_name,
        phone_number=c.phone_number,
        email=c.email,
        photo_uri=c.photo_uri,
        eth_address=c.eth_address,
        ens_name=c.ens_name,
        has_eth_address=c.has_eth_address,
        has_ens=c.has_ens,
    )


@app.get("/contacts")
def list_contacts(
    request: Request,
    view: Literal["all", "wallet", "ens", "either"] = Query("all", alias="filter"),
) -> list[ContactItem]:
    service = get_service(request)
    if view == "wallet":
        contacts = service.list_with_wallet()
    elif view == "ens":
        contacts = service.list_with_ens()
    elif view == "either":
        contacts = service.list_with_either_eth_field()
    else:
        contacts = service.list_all()
    return [_to_item(c) for c in contacts]


@app.get("/contacts/by-phone")
def get_contact_by_phone(request: Request, phone: str) -> ContactItem:
    service = get_service(request)
    region = _settings(request.app).default_region
    contact = service.find_by_phone(phone, default_region=region)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return _to_item(contact)


@app.get("/contacts/{contact_id}")
def get_contact(contact_id: str, request: Request) -> ContactItem:
    contact = get_service(request).get_by_id(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return _to_item(contact)


@app.put("/contacts/{contact_id}/eth-address", status_code=204)
def set_eth_address(contact_id: str, body: EthAddressBody, request: Request):
    service = get_service(request)
    try:
        ok = service.set_wallet_address(contact_id, body.address)
    except InvalidWalletAddress as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if not ok:
        raise HTTPException(status_code=404, detail="Contact name row not found")
    return Response(status_code=204)


@app.put("/contacts/{contact_id}/ens-name", status_code=204)
def set_ens_name(contact_id: str, body: EnsNameBody, request: Request):
    if not get_service(request).set_ens_name(contact_id, body.ens_name):
        raise HTTPException(status_code=404, detail="Contact name row not found")
    return Response(status_code=204)


@app.put("/contacts/{contact_id}/ens-override", status_code=204)
def save_ens_override(contact_id: str, body: EnsNameBody, request: Request):
    get_service(request).save_ens_override(contact_id, body.ens_name)
    return Response(status_code=204)


@app.post("/contacts")
def create_contact(body: CreateContactBody, request: Request):
    result = get_service(request).create_contact(
        body.display_name,
        phone_number=body.phone_number,
        email=body.email,
        eth_address=body.eth_address,
        ens_name=body.ens_name,
    )
    if isinstance(result, CreateFailed):
        raise HTTPException(status_code=500, detail=result.reason)
    return JSONResponse(content={"contact_id": result.contact_id}, status_code=201)
