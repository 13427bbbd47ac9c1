"""FastAPI command interface over a shared engine session."""

from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from gomoku import __version__
from gomoku.config import CONFIG
from gomoku.core.errors import GomokuError
from gomoku.core.gateway import LocalSession

app = FastAPI(title=CONFIG.ui.app_name, version=__version__)

# Shared session; LocalSession serialises access with its own lock.
session = LocalSession()


class ClickRequest(BaseModel):
    x: int  # 0-based column
    y: int  # 0-based row


class HistoryResponse(BaseModel):
    history: List[int]


def _run(call, *args) -> HistoryResponse:
    try:
        return HistoryResponse(history=call(*args))
    except GomokuError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/history", response_model=HistoryResponse)
def get_history():
    return HistoryResponse(history=session.snapshot())


@app.post("/init_game", response_model=HistoryResponse)
def init_game():
    return _run(session.init_game)


@app.post("/click", response_model=HistoryResponse)
def click(req: ClickRequest):
    return _run(session.click, req.x, req.y)


@app.post("/undo", response_model=HistoryResponse)
def undo():
    return _run(session.undo)


@app.post("/step", response_model=HistoryResponse)
def step():
    return _run(session.step)


@app.post("/restart", response_model=HistoryResponse)
def restart():
    return _run(session.restart)
