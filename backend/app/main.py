import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from chemcheck.engine import check_equation, check_isomers, standardize_formula
from chemcheck.errors import ChemParseError

logger = logging.getLogger(__name__)

app = FastAPI(title="ChemCheck API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class EquationRequest(BaseModel):
    equation: str


class IsomerRequest(BaseModel):
    first: str
    second: str


class FormulaRequest(BaseModel):
    formula: str


class StepInfo(BaseModel):
    description: str
    expression: str
    explanation: str
    step_number: int


class Summary(BaseModel):
    runtime_ms: float
    total_steps: int
    timestamp: str
    validation_status: str


class EquationResponse(BaseModel):
    equation: str
    steps: list[StepInfo]
    final_answer: str
    balanced: bool
    element_totals: dict[str, dict[str, int]]
    summary: Summary


class IsomerResponse(BaseModel):
    formulas: list[str]
    steps: list[StepInfo]
    final_answer: str
    isomers: bool
    summary: Summary


class StandardizeResponse(BaseModel):
    formula: str
    standardized: str
    element_counts: dict[str, int]


def _run(check, *args):
    if not all(arg.strip() for arg in args):
        raise HTTPException(status_code=400, detail="Input cannot be empty.")
    try:
        return check(*args)
    except ChemParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("check failed for %r", args)
        raise HTTPException(status_code=500, detail=f"Checker error: {str(e)}")


@app.post("/api/equation/check", response_model=EquationResponse)
def equation_check(req: EquationRequest):
    return _run(check_equation, req.equation)


@app.post("/api/formula/isomer", response_model=IsomerResponse)
def formula_isomer(req: IsomerRequest):
    return _run(check_isomers, req.first, req.second)


@app.post("/api/formula/standardize", response_model=StandardizeResponse)
def formula_standardize(req: FormulaRequest):
    return _run(standardize_formula, req.formula)
