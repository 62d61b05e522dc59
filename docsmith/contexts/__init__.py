"""
Bounded contexts of the draft pipeline.

- Templating: template schema loading and validation
- Drafting: prompt construction and draft synthesis
- Validation: input admissibility and draft structure checks
"""
