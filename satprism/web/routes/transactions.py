"""
交易估值 API 路由
"""

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from satprism.core.services import ValuationService
from satprism.web.models import ErrorResponse, TransactionsResponse
from satprism.web.utils import failure_response

router = APIRouter()


@router.get(
    "/transactions",
    response_model=TransactionsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def list_transactions(
    request: Request,
    pubkey: str | None = Query(None, description="扩展公钥 (xpub 或 zpub)"),
) -> TransactionsResponse | JSONResponse:
    """
    获取扩展公钥的交易估值

    - **pubkey**: xpub 或 zpub; zpub 会先转换为 xpub

    每笔交易返回交易日的美元价值、按当前价格计算的美元价值及两者之差。
    """
    service: ValuationService = request.app.state.valuation_service
    outcome = await service.value(pubkey)
    if not outcome.ok:
        return failure_response(outcome.failure, request)
    return TransactionsResponse(transactions=[record.to_wire() for record in outcome.records])
