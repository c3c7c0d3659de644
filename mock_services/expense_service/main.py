from fastapi import FastAPI, HTTPException, Request

app = FastAPI(title="Mock Expense Service", version="1.0.0")
# In-memory store; restarts wipe it
EXPENSES: dict[str, dict] = {}

@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/api/expenses")
async def create_expense(request: Request):
    expense = await request.json()
    if "id" not in expense or "amount" not in expense:
        raise HTTPException(status_code=400, detail="id and amount are required")
    EXPENSES[expense["id"]] = expense
    return {"message": "success", "data": expense}

@app.get("/api/expenses")
def list_expenses():
    return {"message": "success", "data": sorted(EXPENSES.values(), key=lambda e: e.get("date", ""), reverse=True)}
