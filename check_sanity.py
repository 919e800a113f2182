import sys
print("Checking imports...")
try:
    import fitz
    print("PyMuPDF: OK")
except ImportError as e:
    print(f"PyMuPDF Error: {e}")

try:
    import docx
    print("python-docx: OK")
except ImportError as e:
    print(f"python-docx Error: {e}")

try:
    import pptx
    print("python-pptx: OK")
except ImportError as e:
    print(f"python-pptx Error: {e}")

try:
    from app.main import app
    print(f"App Import: OK ({len(app.routes)} routes)")
except Exception as e:
    print(f"App Import Error: {e}")
    sys.exit(1)

print("Done.")
