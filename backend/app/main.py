from typing import Optional

import numpy as np
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from linsolve import classifier, engine, matrix_ops
from linsolve.constants import DEFAULT_METHOD
from linsolve.formatting import render_trace

app = FastAPI(title="linsolve API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class MatrixRequest(BaseModel):
    matrix: list[list[float]]


class SolveRequest(MatrixRequest):
    method: str = DEFAULT_METHOD
    steps: bool = False


class StepInfo(BaseModel):
    kind: str
    details: dict
    matrix: Optional[list[list[float]]] = None


class SolveResponse(BaseModel):
    status: str
    method: str
    solution: Optional[list[float]] = None
    max_error: Optional[float] = None
    accuracy: Optional[str] = None
    determinant: Optional[float] = None
    error_message: Optional[str] = None
    classification: Optional[str] = None
    steps: Optional[list[StepInfo]] = None
    steps_text: Optional[str] = None


class ClassifyResponse(BaseModel):
    status: str
    rank_coefficients: int
    rank_augmented: int


class DeterminantResponse(BaseModel):
    determinant: float


class InverseResponse(BaseModel):
    inverse: list[list[float]]


@app.get("/api/methods")
def methods():
    return {
        "methods": [
            {"name": name, "title": engine.get_solver(name).title}
            for name in engine.available_methods()
        ],
        "default": DEFAULT_METHOD,
    }


@app.post("/api/solve", response_model=SolveResponse)
def solve(req: SolveRequest):
    if not req.matrix:
        raise HTTPException(status_code=400, detail="Matrix cannot be empty.")

    try:
        result = engine.solve_system(req.matrix, method=req.method, trace=req.steps)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    data = result.to_dict()
    if result.trace is not None:
        data["steps_text"] = render_trace(result.trace)
    return data


@app.post("/api/classify", response_model=ClassifyResponse)
def classify(req: MatrixRequest):
    try:
        status = classifier.classify(req.matrix)
        rank_a, rank_ab = classifier.ranks(req.matrix)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": status.value, "rank_coefficients": rank_a, "rank_augmented": rank_ab}


@app.post("/api/determinant", response_model=DeterminantResponse)
def determinant(req: MatrixRequest):
    try:
        with np.errstate(over="raise", divide="raise", invalid="raise"):
            value = matrix_ops.determinant(req.matrix)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FloatingPointError as e:
        raise HTTPException(status_code=400, detail=f"Determinant is out of range: {e}")
    return {"determinant": value}


@app.post("/api/inverse", response_model=InverseResponse)
def inverse(req: MatrixRequest):
    try:
        with np.errstate(over="raise", divide="raise", invalid="raise"):
            square = matrix_ops.as_matrix(req.matrix)
            if matrix_ops.is_near_zero(matrix_ops.determinant(square)):
                raise HTTPException(status_code=400,
                                    detail="Matrix is singular (determinant is zero).")
            value = matrix_ops.inverse(square)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FloatingPointError as e:
        raise HTTPException(status_code=400, detail=f"Inverse is out of range: {e}")
    return {"inverse": value.tolist()}
