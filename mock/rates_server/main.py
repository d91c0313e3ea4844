from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Exchange Rate Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/rates_stub") if os.path.exists("/rates_stub") else Path(__file__).resolve().parents[1] / "rates_stub"

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/v2/exchange-rates")
def get_exchange_rates(currency: str = "USD"):
    file = DATA_DIR / f"exchange_rates_{currency.upper()}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="currency not found")
    return JSONResponse(content=json.loads(file.read_text()))
