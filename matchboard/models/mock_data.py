"""Mock Challonge payloads for testing and demo purposes."""

from typing import Any, Dict

MOCK_TOURNAMENT_ID = "demo-open-2025"

# Shaped like GET /tournaments/{id}/matches.json
MOCK_MATCHES_PAYLOAD: Dict[str, Any] = {
    "data": [
        {
            "id": "101",
            "type": "match",
            "attributes": {
                "state": "open",
                "suggestedPlayOrder": 1,
                "timestamps": {
                    "startedAt": "2022-01-01T10:00:00+00:00",
                    "underwayAt": "2022-01-01T10:02:00+00:00",
                },
            },
            "relationships": {
                "player1": {"data": {"id": "1", "type": "participant"}},
                "player2": {"data": {"id": "2", "type": "participant"}},
                "station": {"data": {"id": "s10", "type": "station"}},
            },
        },
        {
            "id": "102",
            "type": "match",
            "attributes": {
                "state": "open",
                "suggestedPlayOrder": 2,
                "timestamps": {
                    "startedAt": "2022-01-01T10:05:00+00:00",
                    "underwayAt": None,
                },
            },
            "relationships": {
                "player1": {"data": {"id": "3", "type": "participant"}},
                "player2": {"data": {"id": "4", "type": "participant"}},
                "station": {"data": {"id": "s2", "type": "station"}},
            },
        },
        {
            "id": "103",
            "type": "match",
            "attributes": {
                "state": "pending",
                "suggestedPlayOrder": 4,
                "timestamps": {"startedAt": None, "underwayAt": None},
            },
            "relationships": {
                "player1": {"data": None},
                "player2": {"data": {"id": "5", "type": "participant"}},
                "station": {"data": None},
            },
        },
        {
            "id": "104",
            "type": "match",
            "attributes": {
                "state": "pending",
                "suggestedPlayOrder": 3,
                "timestamps": {"startedAt": None, "underwayAt": None},
            },
            "relationships": {
                "player1": {"data": {"id": "6", "type": "participant"}},
                "player2": {"data": {"id": "7", "type": "participant"}},
                "station": {"data": None},
            },
        },
        {
            "id": "105",
            "type": "match",
            "attributes": {
                "state": "complete",
                "suggestedPlayOrder": 0,
                "timestamps": {
                    "startedAt": "2022-01-01T09:30:00+00:00",
                    "underwayAt": "2022-01-01T09:31:00+00:00",
                },
            },
            "relationships": {
                "player1": {"data": {"id": "1", "type": "participant"}},
                "player2": {"data": {"id": "8", "type": "participant"}},
                "station": {"data": {"id": "s2", "type": "station"}},
            },
        },
    ],
    "included": [
        {"id": "1", "type": "participant", "attributes": {"name": "Alice"}},
        {"id": "2", "type": "participant", "attributes": {"name": "Bob"}},
        {"id": "3", "type": "participant", "attributes": {"name": "Charlie"}},
        {
            "id": "4",
            "type": "participant",
            "attributes": {"name": "Dave (invitation pending)"},
        },
        {"id": "5", "type": "participant", "attributes": {"name": "Eve"}},
        {"id": "6", "type": "participant", "attributes": {"name": "Frank"}},
        {"id": "7", "type": "participant", "attributes": {"name": None}},
        {"id": "8", "type": "participant", "attributes": {"name": "Grace"}},
    ],
}

# Shaped like GET /tournaments/{id}/stations.json
MOCK_STATIONS_PAYLOAD: Dict[str, Any] = {
    "data": [
        {"id": "s2", "type": "station", "attributes": {"name": "Table 2"}},
        {"id": "s10", "type": "station", "attributes": {"name": "Table 10"}},
    ],
}
