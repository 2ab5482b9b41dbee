import logging
import os
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from analyzer import analyze
from languages import get_sample
from lexical_types import Language

logging.basicConfig(level=os.environ.get('LEXER_LOG_LEVEL', 'INFO').upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Lexical Analyzer API",
    description="API for tokenizing Java and C++ code: tokens, scoped symbol table, lexeme statistics and three-address code",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Pydantic Models ---
class TokenInfo(BaseModel):
    value: str
    type: str
    line: int
    column: int
    message: Optional[str] = None


class SymbolInfo(BaseModel):
    lexeme: str
    token_kind: str
    data_type: Optional[str] = None
    scope: str
    line_numbers: List[int]
    attributes: Dict[str, Any] = Field(default_factory=dict)


class LexemeStatInfo(BaseModel):
    type: str
    count: int
    frequency: float


class AnalyzeRequest(BaseModel):
    code: str = Field(..., description="Source code to analyze", json_schema_extra={"example": "int x = a + b * 2;"})
    language: Language = Field(
        default=Language.JAVA,
        description="Source language",
        json_schema_extra={"example": "java"}
    )


class AnalyzeResponse(BaseModel):
    success: bool
    language: str
    tokens: List[TokenInfo]
    errors: List[TokenInfo]
    symbol_table: List[SymbolInfo]
    lexeme_stats: List[LexemeStatInfo]
    tac: List[str]
    diagnostics: List[str]


class LexicalOnlyResponse(BaseModel):
    success: bool
    tokens: List[TokenInfo]
    errors: List[TokenInfo]
    symbol_table: List[SymbolInfo]
    lexeme_stats: List[LexemeStatInfo]


class TacResponse(BaseModel):
    success: bool
    tac: List[str]
    diagnostics: List[str]


class SampleResponse(BaseModel):
    language: str
    code: str


class LanguagesResponse(BaseModel):
    languages: List[str]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
    service: str


def run_analysis(request: AnalyzeRequest):
    if not request.code.strip():
        raise HTTPException(status_code=400, detail="Please enter some code to analyze.")
    return analyze(request.code, request.language).to_dict()


# --- API Endpoints ---
@app.post('/api/analyze', response_model=AnalyzeResponse, responses={400: {"model": ErrorResponse}})
def analyze_code(request: AnalyzeRequest):
    """
    Run every lexical phase over the code.

    Returns everything the frontend displays:
    - Tokens, with ERROR tokens also listed separately
    - Scoped symbol table
    - Lexeme statistics per token kind
    - Three-address code for assignments and if headers
    - Non-fatal diagnostics
    """
    result = run_analysis(request)
    return {'success': True, **result}


@app.post('/api/lexical', response_model=LexicalOnlyResponse, responses={400: {"model": ErrorResponse}})
def lexical_analysis(request: AnalyzeRequest):
    """
    Perform lexical analysis only.

    Returns tokens, symbol table and statistics without three-address code.
    """
    result = run_analysis(request)
    return {
        'success': True,
        'tokens': result['tokens'],
        'errors': result['errors'],
        'symbol_table': result['symbol_table'],
        'lexeme_stats': result['lexeme_stats'],
    }


@app.post('/api/tac', response_model=TacResponse, responses={400: {"model": ErrorResponse}})
def three_address_code(request: AnalyzeRequest):
    """Generate three-address code for the assignments and if headers in the code."""
    result = run_analysis(request)
    return {'success': True, 'tac': result['tac'], 'diagnostics': result['diagnostics']}


@app.get('/api/samples/{language}', response_model=SampleResponse)
def sample_code(language: Language):
    """Sample program for the language, as loaded into the editor"""
    return {'language': language.value, 'code': get_sample(language)}


@app.get('/api/languages', response_model=LanguagesResponse)
def languages():
    return {'languages': [lang.value for lang in Language]}


@app.get('/api/health', response_model=HealthResponse)
def health_check():
    """Health check endpoint to verify API status"""
    return {
        'status': 'healthy',
        'service': 'lexical-analyzer-api'
    }


if __name__ == '__main__':
    uvicorn.run(
        'compiler_api:app',
        host=os.environ.get('LEXER_API_HOST', '0.0.0.0'),
        port=int(os.environ.get('LEXER_API_PORT', '5000')),
        reload=os.environ.get('LEXER_API_RELOAD', '1').lower() in ('1', 'true', 'yes', 'on'),
    )
