"""Bridge between service-layer exceptions and RFC 7807 problem responses."""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify

from tripreg.core.errors import APIError
from tripreg.services._shared.base import BaseService
from tripreg.services._shared.errors import ServiceError

log = logging.getLogger(__name__)

_translator = BaseService()


def problem_for(err: ServiceError) -> tuple[Response, int]:
    """Translate ``err`` and render it as ``application/problem+json``.

    :param err: Exception raised by a service.
    :type err: ServiceError
    :returns: Response and status code.
    :rtype: tuple[flask.Response, int]
    """
    translated = _translator.translate_exceptions(err)
    if not isinstance(translated, APIError):
        raise err
    problem = translated.to_problem()
    level = log.error if translated.status_code >= 500 else log.warning
    level(
        "ServiceError: %s code=%s status=%s request_id=%s",
        type(err).__name__,
        translated.code,
        translated.status_code,
        problem.get("request_id"),
    )
    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    return resp, translated.status_code


def register_service_error_handler(app: Flask) -> None:
    """Attach the :class:`ServiceError` handler to ``app``.

    Flask resolves handlers by exception MRO, so this wins over the generic
    ``Exception`` handler installed by :mod:`tripreg.core.errors`.
    """

    @app.errorhandler(ServiceError)
    def _handle_service_error(err: ServiceError):
        return problem_for(err)
