# plant_identifier/i18n.py
"""Message catalogs for the API errors, the prompt and the page."""
from typing import Dict

DEFAULT_LOCALE = "pt-BR"

MESSAGES: Dict[str, Dict[str, str]] = {
    "pt-BR": {
        "language_name": "português brasileiro",
        # API errors
        "error_missing_input": "Imagem e tipo MIME são obrigatórios.",
        "error_invalid_mime": "Tipo de imagem inválido. Use JPEG, PNG, GIF ou WebP.",
        "error_invalid_image": "Imagem inválida. Envie os dados em base64.",
        "error_image_too_large": "Imagem muito grande. O tamanho máximo é {max_mb} MB.",
        "error_analysis_failed": "Falha ao analisar a imagem. Tente novamente.",
        # Page controller
        "error_unknown": "Erro desconhecido.",
        "error_connection": "Falha ao conectar com o servidor. Verifique sua conexão.",
        # Capture widget
        "camera_error": "Não foi possível acessar a câmera. Verifique as permissões ou envie um arquivo.",
        "mode_camera": "Câmera",
        "mode_upload": "Enviar arquivo",
        "capture_button": "Capturar foto",
        "upload_prompt": "Arraste uma imagem ou clique para selecionar",
        "upload_hint": "JPEG, PNG, WebP ou GIF",
        # Page
        "page_title": "Identificador de Plantas",
        "page_subtitle": "Envie uma foto de qualquer planta, flor ou árvore para identificá-la e saber sobre riscos e comestibilidade.",
        "analyzing": "Analisando imagem...",
        "selected_image": "Imagem selecionada",
        "identified_image": "Planta identificada",
        "try_again": "Tentar novamente",
        "analyze_another": "Analisar outra planta",
        # Result renderer
        "no_plant_title": "Nenhuma planta identificada na imagem.",
        "no_plant_hint": "Envie uma foto de uma planta, flor, árvore ou fungo.",
        "confidence": "Confiança: {level}",
        "confidence_high": "Alta",
        "confidence_medium": "Média",
        "confidence_low": "Baixa",
        "toxicity_title": "Toxicidade",
        "toxic": "Tóxica",
        "not_toxic": "Não tóxica",
        "severity": "Gravidade: {level}",
        "severity_none": "Nenhuma",
        "severity_mild": "Leve",
        "severity_moderate": "Moderada",
        "severity_severe": "Severa",
        "severity_fatal": "Fatal",
        "toxic_to": "Afeta",
        "dangerous_parts": "Partes perigosas",
        "symptoms": "Sintomas",
        "no_symptoms": "Nenhum sintoma listado",
        "edibility_title": "Comestibilidade",
        "edible": "Comestível",
        "not_edible": "Não comestível",
        "edible_parts": "Partes comestíveis",
        "preparation": "Como preparar",
        "warnings": "Avisos",
        "not_informed": "Não informado",
    },
    "en": {
        "language_name": "English",
        "error_missing_input": "Image and MIME type are required.",
        "error_invalid_mime": "Invalid image type. Use JPEG, PNG, GIF or WebP.",
        "error_invalid_image": "Invalid image. Send the data as base64.",
        "error_image_too_large": "Image too large. The maximum size is {max_mb} MB.",
        "error_analysis_failed": "Failed to analyze the image. Try again.",
        "error_unknown": "Unknown error.",
        "error_connection": "Could not reach the server. Check your connection.",
        "camera_error": "Could not access the camera. Check the permissions or upload a file.",
        "mode_camera": "Camera",
        "mode_upload": "Upload file",
        "capture_button": "Take photo",
        "upload_prompt": "Drag an image here or click to select",
        "upload_hint": "JPEG, PNG, WebP or GIF",
        "page_title": "Plant Identifier",
        "page_subtitle": "Send a photo of any plant, flower or tree to identify it and learn about its risks and edibility.",
        "analyzing": "Analyzing image...",
        "selected_image": "Selected image",
        "identified_image": "Identified plant",
        "try_again": "Try again",
        "analyze_another": "Analyze another plant",
        "no_plant_title": "No plant was identified in the image.",
        "no_plant_hint": "Send a photo of a plant, flower, tree or fungus.",
        "confidence": "Confidence: {level}",
        "confidence_high": "High",
        "confidence_medium": "Medium",
        "confidence_low": "Low",
        "toxicity_title": "Toxicity",
        "toxic": "Toxic",
        "not_toxic": "Non-toxic",
        "severity": "Severity: {level}",
        "severity_none": "None",
        "severity_mild": "Mild",
        "severity_moderate": "Moderate",
        "severity_severe": "Severe",
        "severity_fatal": "Fatal",
        "toxic_to": "Affects",
        "dangerous_parts": "Dangerous parts",
        "symptoms": "Symptoms",
        "no_symptoms": "No symptoms listed",
        "edibility_title": "Edibility",
        "edible": "Edible",
        "not_edible": "Not edible",
        "edible_parts": "Edible parts",
        "preparation": "How to prepare",
        "warnings": "Warnings",
        "not_informed": "Not informed",
    },
}


def get_messages(locale: str = DEFAULT_LOCALE) -> Dict[str, str]:
    """Return the catalog for ``locale``, falling back to the default one."""
    return MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
