from url_shortener import create_app
from url_shortener.config import load_config

config = load_config()
app = create_app(config)

if __name__ == "__main__":
    app.run(host=config.host, port=config.port, debug=False)
