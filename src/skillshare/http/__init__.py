"""HTTP primitives: headers, request, response, conditional-request parsing."""
