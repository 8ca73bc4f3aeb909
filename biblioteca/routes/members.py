from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from biblioteca.configs import DEFAULT_LIMIT, MAX_LIMIT
from biblioteca.core.api import BibliotecaAPI, get_api
from biblioteca.core.exceptions import ValidationError
from biblioteca.core.models import LoanStatus
from biblioteca.schemas.common import envelope, make_pagination
from biblioteca.schemas.member import Member, MemberCreate, MemberUpdate

router = APIRouter()


def _page(api, search, limit, offset):
    members = [Member.model_validate(m) for m in api.members.find_all(search=search, limit=limit, offset=offset)]
    return members, make_pagination(api.members.count(search=search), limit, offset)


@router.get("")
async def list_members(
        search: Optional[str] = None,
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
        offset: int = Query(0, ge=0),
        api: BibliotecaAPI = Depends(get_api)):
    members, pagination = _page(api, search.strip() if search else None, limit, offset)
    return envelope(members, pagination=pagination)


@router.get("/search")
async def search_members(
        q: Optional[str] = None,
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
        offset: int = Query(0, ge=0),
        api: BibliotecaAPI = Depends(get_api)):
    query = (q or "").strip()
    if not query:
        raise ValidationError("A search query is required", details=["q: is required"])
    members, pagination = _page(api, query, limit, offset)
    body = envelope(members, pagination=pagination)
    body["query"] = query
    return body


@router.get("/{member_id}")
async def get_member(member_id: int, api: BibliotecaAPI = Depends(get_api)):
    return envelope(Member.model_validate(api.members.get(member_id)))


@router.get("/{member_id}/prestiti")
async def member_loans(
        member_id: int,
        loan_status: Optional[LoanStatus] = Query(None, alias="status"),
        api: BibliotecaAPI = Depends(get_api)):
    member = api.members.get(member_id)
    return envelope({
        "member": Member.model_validate(member),
        "loans": api.loans.find_by_member(member_id, status=loan_status),
    })


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_member(payload: MemberCreate, api: BibliotecaAPI = Depends(get_api)):
    member = api.members.create(payload)
    return envelope(Member.model_validate(member), message="Member created")


@router.put("/{member_id}")
async def update_member(member_id: int, payload: MemberUpdate, api: BibliotecaAPI = Depends(get_api)):
    member = api.members.update(member_id, payload)
    return envelope(Member.model_validate(member), message="Member updated")


@router.delete("/{member_id}")
async def delete_member(member_id: int, api: BibliotecaAPI = Depends(get_api)):
    api.members.delete(member_id)
    return envelope(message="Member deleted")
