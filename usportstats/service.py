"""
HTTP service.

Health endpoints for the deployment platform plus two read-only dataset
routes. Run with: uvicorn usportstats.service:app
"""
from datetime import datetime, timezone
import json

from fastapi import FastAPI, HTTPException, Query

from usportstats import __version__
from usportstats.api import get_router
from usportstats.errors import RequestFailed, UnsupportedQuery
from usportstats.router import QueryResult
from usportstats.sports import RANKINGS, SCHEDULE

app = FastAPI(title='usportstats', version=__version__)
START = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def _payload(result: QueryResult) -> dict:
    # Round-trip through pandas JSON so dates and NaN come out as JSON types
    records = json.loads(result.frame.to_json(orient='records', date_format='iso'))
    return {
        'rows': len(records),
        'records': records,
        'failures': [f.to_dict() for f in result.failures],
    }


def _run(sport: str, gender: str, kind: str, seasons: list[int] | None, variants: list[str] | None = None) -> dict:
    try:
        result = get_router().get(sport, gender, seasons or None, kind=kind, variants=variants)
    except UnsupportedQuery as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except RequestFailed as e:
        raise HTTPException(
            status_code=502,
            detail={'message': str(e), 'failures': [f.to_dict() for f in e.failures]},
        ) from e
    return _payload(result)


@app.get('/')
def root():
    return {'service': 'usportstats', 'status': 'ok', 'start': START}


@app.get('/health')
def health():
    return {'ok': True}


@app.get('/ready')
def ready():
    return {'ready': True}


@app.get('/schedule/{sport}/{gender}')
def schedule(sport: str, gender: str, season: list[int] | None = Query(None)):
    return _run(sport, gender, SCHEDULE, season)


@app.get('/rankings/{sport}/{gender}')
def rankings(
    sport: str,
    gender: str,
    season: list[int] | None = Query(None),
    event: list[str] | None = Query(None),
):
    return _run(sport, gender, RANKINGS, season, event)
