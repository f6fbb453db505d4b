"""
Real-time order update gateway: connection registry and the /ws endpoint.
Runs inside the REST API process.
"""
