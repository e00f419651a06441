from fastapi import FastAPI
from features.latency_probe.interface.api import router as latency_router

app = FastAPI(title="singbox-latency API", version="0.1.0")

@app.get("/healthz")
def healthz():
    return {"status": "ok"}

app.include_router(latency_router, prefix="/api")
