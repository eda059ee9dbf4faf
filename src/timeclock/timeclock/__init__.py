"""Time-clock kiosk package.

Organized by feature modules (employees, punches, leave, access, workflow, ...)
with a thin Flask controller layer over service/repository layers. The punch
workflow runs on its own asyncio loop and talks to devices through ports.
"""
