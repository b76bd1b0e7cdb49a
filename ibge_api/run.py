import uvicorn

from ibge_api.config.logging_setup import setup_logging
from ibge_api.config.settings import get_settings


def main():
    """Inicia o servidor da API localmente."""
    settings = get_settings()

    # Configurar logging a partir do arquivo YAML
    setup_logging(settings.log_config_path)

    print(f"Iniciando API em http://{settings.ibge_api_host}:{settings.ibge_api_port}")
    print("Pressione CTRL+C para sair.")

    uvicorn.run(
        "ibge_api.main:app",
        host=settings.ibge_api_host,
        port=settings.ibge_api_port,
        log_config=None  # Usar configuração já inicializada
    )


if __name__ == "__main__":
    main()
