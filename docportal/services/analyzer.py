"""
Document Analyzer Module

Extracts the client name and technical data from an uploaded document. The
analyzer never raises to its caller: any failure is logged and reported as the
read-error result.
"""
from __future__ import annotations

import base64
import json
import logging
from typing import Any

import requests
from pydantic import ValidationError

from docportal.core.errors import AnalysisError
from docportal.schemas.analysis import AnalysisResult

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """Analiza este documento (parte de trabajo o albarán).
Tu tarea es extraer la siguiente información estructurada:

1. **Nombre del Cliente**: Busca campos como "Cliente", "Empresa", o el nombre en la cabecera. Si no estás seguro, pon "Desconocido".
2. **Horas Totales**: Busca campos de "Horas", "Tiempo empleado", "Mano de obra". Suma el total si hay varias líneas. Si no hay horas, pon 0.
3. **Incidencia Resuelta**: Determina si el trabajo ha finalizado o la incidencia está resuelta (busca checkmarks, textos como "Finalizado", "Resuelto", "Terminado"). Devuelve true o false.
4. **Materiales**: Extrae una lista de productos o materiales usados (Sección "Materiales", "Repuestos", "Productos"). Extrae el nombre y la cantidad (unidades).

Responde estrictamente en formato JSON."""

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "clientName": {
            "type": "STRING",
            "description": "El nombre extraído del cliente o empresa.",
        },
        "confidence": {
            "type": "NUMBER",
            "description": "Nivel de confianza de 0 a 1.",
        },
        "data": {
            "type": "OBJECT",
            "properties": {
                "hours": {"type": "NUMBER", "description": "Total de horas de mano de obra."},
                "isResolved": {
                    "type": "BOOLEAN",
                    "description": "¿El trabajo está marcado como resuelto/finalizado?",
                },
                "materials": {
                    "type": "ARRAY",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "name": {"type": "STRING"},
                            "units": {"type": "NUMBER"},
                        },
                    },
                },
            },
            "required": ["hours", "isResolved", "materials"],
        },
    },
    "required": ["clientName", "confidence", "data"],
}


class DocumentAnalyzer:
    """Base class. Subclasses implement _analyze and may raise freely."""

    @property
    def name(self) -> str:
        return "base"

    def analyze(self, payload: bytes, mime_type: str) -> AnalysisResult:
        try:
            return self._analyze(payload, mime_type)
        except (requests.RequestException, AnalysisError, ValidationError, ValueError) as exc:
            logger.error("Error analyzing document with %s: %s", self.name, exc)
            return AnalysisResult.read_error()

    def _analyze(self, payload: bytes, mime_type: str) -> AnalysisResult:
        raise NotImplementedError


class GeminiDocumentAnalyzer(DocumentAnalyzer):
    def __init__(
        self,
        *,
        api_key: str = "",
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout_s: int = 60,
    ) -> None:
        self.api_key = str(api_key or "").strip()
        self.model = str(model or "gemini-2.5-flash").strip()
        self.base_url = str(base_url or "https://generativelanguage.googleapis.com").rstrip("/")
        self.timeout_s = max(1, int(timeout_s))

    @property
    def name(self) -> str:
        return "gemini"

    def _build_payload(self, payload: bytes, mime_type: str) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {
                            "inlineData": {
                                "mimeType": mime_type,
                                "data": base64.b64encode(payload).decode("ascii"),
                            }
                        },
                        {"text": EXTRACTION_PROMPT},
                    ],
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def _request(self, body: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise AnalysisError("gemini_api_key_missing")
        url = f"{self.base_url}/v1beta/models/{self.model}:generateContent"
        resp = requests.post(
            url,
            params={"key": self.api_key},
            json=body,
            timeout=self.timeout_s,
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise AnalysisError("gemini_invalid_response")
        return data

    @staticmethod
    def _response_text(data: dict[str, Any]) -> str:
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return ""
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        if not isinstance(content, dict):
            return ""
        parts = content.get("parts")
        if not isinstance(parts, list):
            return ""
        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        return "".join(texts).strip()

    def _analyze(self, payload: bytes, mime_type: str) -> AnalysisResult:
        data = self._request(self._build_payload(payload, mime_type))
        text = self._response_text(data)
        if not text:
            raise AnalysisError("No response from Gemini")
        parsed = json.loads(text)
        if not isinstance(parsed, dict):
            raise AnalysisError("gemini_invalid_json")
        return AnalysisResult.model_validate(parsed)
