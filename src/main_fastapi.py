from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import FileResponse, HTMLResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from typing import List, Optional
from pydantic import BaseModel
import os
import uvicorn

from algoritmo.SortingAnalyzer import ALGORITHM_NAMES
from sorting_analysis_app import INTERFACE_FILE, SAMPLE_SIZE, SortingAnalysisAPI

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 8000))


# Modelos Pydantic para validación
class ValidateRequest(BaseModel):
    data: str
    data_type: str = "integer"

class SampleRequest(BaseModel):
    data_type: str = "integer"
    size: int = SAMPLE_SIZE
    seed: Optional[int] = None

class AnalysisRequest(BaseModel):
    algorithms: List[str] = list(ALGORITHM_NAMES)


# Crear aplicación FastAPI
app = FastAPI(title="Sorting Algorithm Analyzer API", version="1.0.0")
api = SortingAnalysisAPI()

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _ok_or_400(result: dict) -> dict:
    """Convierte una respuesta fallida del backend en HTTP 400."""
    if not result.get("success"):
        raise HTTPException(status_code=400, detail=result.get("message"))
    return result


def _download(result: dict, media_type: str) -> Response:
    if not result.get("success"):
        raise HTTPException(status_code=404, detail=result.get("message"))
    return Response(
        content=result["content"],
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{result["filename"]}"'},
    )


# === Endpoints básicos ===
@app.get("/")
def read_root():
    """Página principal - interfaz HTML"""
    if INTERFACE_FILE.exists():
        return FileResponse(str(INTERFACE_FILE))
    return HTMLResponse(content="<h3>Sorting Algorithm Analyzer API</h3><p>Use endpoints to run analysis.</p>",
                        status_code=200)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/status")
def get_status():
    """Obtener estado actual del sistema"""
    return api.get_status()

@app.get("/algorithms")
def list_algorithms():
    """Algoritmos disponibles con su nombre para mostrar"""
    return api.analyzer.get_algorithm_names()

# === Endpoints de entrada de datos ===
@app.post("/validate")
def validate(request: ValidateRequest):
    """Validar entrada manual"""
    return _ok_or_400(api.validate_input(request.data, request.data_type))

@app.post("/upload-text")
async def upload_text(file: UploadFile = File(...), data_type: str = "integer"):
    """Validar el contenido de un archivo de texto subido"""
    content = await file.read()
    return _ok_or_400(api.load_file_content(content, data_type))

@app.post("/sample")
def sample(request: SampleRequest):
    """Generar datos de ejemplo"""
    return _ok_or_400(api.generate_sample_data(request.data_type, request.size, request.seed))

# === Endpoints de análisis ===
@app.post("/analyze")
def analyze(request: AnalysisRequest):
    """Ejecutar análisis y devolver resultados"""
    return _ok_or_400(api.run_analysis(request.algorithms))

@app.post("/analyze/start")
def start_analysis(request: AnalysisRequest):
    """Iniciar análisis en background (consultar /status)"""
    return _ok_or_400(api.start_analysis(request.algorithms))

@app.get("/results")
def get_results():
    """Resultados del último análisis"""
    if not api.current_results:
        raise HTTPException(status_code=404, detail="No results available")
    return api.build_results_payload()

# === Endpoints de exportación ===
@app.get("/export/csv")
def export_csv():
    return _download(api.export_csv(), "text/csv")

@app.get("/export/json")
def export_json():
    return _download(api.export_json(), "application/json")

@app.post("/reset")
def reset():
    return api.reset()


def main():
    uvicorn.run("main_fastapi:app", host=HOST, port=PORT, log_level="info")


# Si ejecutas directamente
if __name__ == "__main__":
    main()
