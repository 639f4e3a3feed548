from fastapi import Request

from epicpoints.services.tracker import TrackerClient


async def get_tracker(request: Request) -> TrackerClient:
    return request.app.state.tracker
