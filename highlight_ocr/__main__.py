from highlight_ocr.main import run

run()
