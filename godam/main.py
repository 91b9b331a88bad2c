from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from godam.api.v1 import account, feriwala, kabadiwala, labour, maal_in, maal_out, stock
from godam.common.error_handlers import register_error_handlers
from godam.core.config import settings

app = FastAPI(title="Godam Dashboard", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register API routers
prefix = settings.API_PREFIX
app.include_router(feriwala.router, prefix=f"{prefix}/feriwala", tags=["feriwala"])
app.include_router(kabadiwala.router, prefix=f"{prefix}/kabadiwala", tags=["kabadiwala"])
app.include_router(labour.router, prefix=f"{prefix}/labour", tags=["labour"])
app.include_router(maal_out.router, prefix=f"{prefix}/maalOut", tags=["maal out"])
app.include_router(maal_in.router, prefix=f"{prefix}/maalin", tags=["maal in"])
app.include_router(account.router, prefix=f"{prefix}/accounts", tags=["accounts"])
app.include_router(stock.router, prefix=f"{prefix}/stock", tags=["stock"])


@app.get("/")
def read_root():
    return {"message": "Welcome to the Godam Dashboard APIs!"}
