from fastapi import FastAPI, Request

from fastapi.middleware.cors import CORSMiddleware

import uvicorn

from logging_config import setup_logging
from routes import chat_router


setup_logging()


app = FastAPI(
    title="SFH Therapy API",
    description="Sentient-Field Hypothesis chat backend with provider failover and axiom compliance",
    version="1.0.0",
)


# CORS settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
        "null",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router)


@app.middleware("http")
async def utf8_charset_middleware(request: Request, call_next):
    response = await call_next(request)
    ct = response.headers.get("content-type", "")
    if "application/json" in ct and "charset" not in ct:
        response.headers["content-type"] = ct + "; charset=utf-8"
    return response


@app.get("/")
async def root():
    return {
        "message": "SFH Therapy API - attachment and integration support",
        "version": "1.0.0",
    }


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
