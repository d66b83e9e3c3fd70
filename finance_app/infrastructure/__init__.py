"""
Infrastructure layer for the Sepur Finance document service.

This layer contains the implementation details for external systems integration:
- Data access (Supabase PostgREST views and stored procedures)
- Authentication (Supabase Auth tokens)
- Document encoding (Jinja2 markup, WeasyPrint PDF, CSV)
- File Storage (Supabase Storage)

The infrastructure layer feeds domain records to the renderer and ships
the encoded documents, keeping the domain layer free of I/O.
"""
