from articlehub import create_app
from config import get_config

config = get_config()

app = create_app(config)

if __name__ == '__main__':
    # The viewer page calls back into /api/articles, so requests must not serialize
    app.run(host='0.0.0.0', port=5000, threaded=True)
