"""Components layer - leaf operations and pure decision logic.

Components are leaf modules that:
- Do NOT import services, workflows, or interfaces
- ARE imported and used BY workflows and services
- May import from: helpers, other components

Architecture:
- helpers/ = stdlib-only utilities and DTOs (pure, stateless)
- components/ = provider calls, scoring and persistence building blocks (this layer)
- workflows/ = orchestration of components for one operation
- services/ = configuration, wiring and long-lived state
- interfaces/ = CLI presentation
"""
