"""
File formats at the edge of the API.

- csv_import: CSV parsing, row validation and import templates
- excel_export: openpyxl workbooks for objects, issues and reports
- transcripts: reading uploaded meeting transcripts (.txt / .docx)
"""
