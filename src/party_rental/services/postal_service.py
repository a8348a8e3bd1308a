"""Address lookup by CEP through the ViaCEP web service."""

from __future__ import annotations

import http.client
import json
import re
import urllib.error
import urllib.request
from typing import Any, Optional

from party_rental.config import APP_NAME, VIACEP_TIMEOUT_SECONDS, VIACEP_URL
from party_rental.domain.models import Address
from party_rental.logging_config import get_logger


def normalize_cep(cep: str) -> str:
    return re.sub(r"\D", "", cep or "")


def _fetch_address(cep: str) -> dict[str, Any]:
    request = urllib.request.Request(
        VIACEP_URL.format(cep=cep),
        headers={"User-Agent": APP_NAME, "Accept": "application/json"},
    )
    with urllib.request.urlopen(request, timeout=VIACEP_TIMEOUT_SECONDS) as response:
        payload = response.read().decode("utf-8")
    return json.loads(payload)


def lookup_address(cep: str) -> Optional[Address]:
    """Return the address for a CEP, or ``None`` when it cannot be resolved.

    Lookup failures never propagate: the caller just leaves the address
    fields for the user to fill in.
    """
    logger = get_logger(__name__)
    digits = normalize_cep(cep)
    if len(digits) != 8:
        logger.info("CEP inválido ignorado: %r", cep)
        return None
    try:
        data = _fetch_address(digits)
    except urllib.error.HTTPError:
        logger.exception("Falha HTTP ao consultar o CEP %s.", digits)
        return None
    except (urllib.error.URLError, OSError, http.client.HTTPException):
        logger.exception("Sem conexão para consultar o CEP %s.", digits)
        return None
    except ValueError:
        logger.exception("Resposta inválida do ViaCEP para o CEP %s.", digits)
        return None
    if not isinstance(data, dict) or data.get("erro"):
        logger.info("CEP %s não encontrado.", digits)
        return None
    return Address(
        cep=data.get("cep") or digits,
        street=data.get("logradouro") or "",
        complement=data.get("complemento") or None,
        neighborhood=data.get("bairro") or "",
        city=data.get("localidade") or "",
        state=data.get("uf") or "",
    )
