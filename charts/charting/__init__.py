"""Declarative chart composition.

Charts are driven by props dataclasses rather than bespoke drawing code. This
package resolves those props into JSON-ready payloads for the renderer, and
holds the design tokens, validation and storage helpers shared by the views.
"""
