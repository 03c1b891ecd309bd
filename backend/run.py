"""Development entry point; `flask --app run` also picks up the CLI commands."""
import os
from dotenv import load_dotenv

load_dotenv()

from internship_attendance import create_app

app = create_app(os.getenv('FLASK_ENV', 'development'))

if __name__ == '__main__':
    app.run(
        host=os.environ.get('HOST', '127.0.0.1'),
        port=int(os.environ.get('PORT', 5000)),
        debug=os.environ.get('FLASK_ENV') == 'development'
    )
