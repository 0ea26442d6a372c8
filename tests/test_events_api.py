"""
Tests for the server-sent-events generator behind /api/events.
"""

import asyncio

from fastapi import Request

from backend.src.api.events_api import event_stream, events


def test_stream_yields_events_and_keepalives_then_releases(notifier):
    async def scenario():
        subscription = notifier.subscribe()

        async def connected():
            return False

        stream = event_stream(subscription, connected, keepalive_seconds=0.01)
        chunks = [await stream.__anext__()]
        notifier.publish("uploaded", "1730219014839-report.csv")
        chunks.append(await stream.__anext__())
        chunks.append(await stream.__anext__())
        assert notifier.subscriber_count == 1
        await stream.aclose()
        return chunks

    chunks = asyncio.run(scenario())

    assert chunks == [
        ": connected\n\n",
        'event: fileUploaded\ndata: "1730219014839-report.csv"\n\n',
        ": keepalive\n\n",
    ]
    assert notifier.subscriber_count == 0


def test_stream_ends_when_client_disconnects(notifier):
    async def scenario():
        subscription = notifier.subscribe()

        async def gone():
            return True

        return [chunk async for chunk in event_stream(subscription, gone, keepalive_seconds=0.01)]

    assert asyncio.run(scenario()) == [": connected\n\n"]
    assert notifier.subscriber_count == 0
    # Nothing left to deliver to
    assert notifier.publish("deleted", "1-a.csv") == 0


def test_events_route_streams_and_registers_a_subscription(app, notifier):
    # /api/events is mounted on the application
    assert app.url_path_for("events") == "/api/events"

    async def receive():
        return {"type": "http.disconnect"}

    async def scenario():
        request = Request({"type": "http", "method": "GET", "path": "/api/events", "headers": []}, receive)
        response = await events(request, notifier=notifier)
        registered = notifier.subscriber_count
        chunks = [chunk async for chunk in response.body_iterator]
        return response, registered, chunks

    response, registered, chunks = asyncio.run(scenario())

    assert response.media_type == "text/event-stream"
    assert response.headers["cache-control"] == "no-cache"
    assert registered == 1
    assert chunks == [": connected\n\n"]
    assert notifier.subscriber_count == 0
