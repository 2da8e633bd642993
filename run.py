# run.py
from presentai import create_app  # Import only the factory
from config import Config

# Create the Flask app instance using the factory
app = create_app(Config)

# Shell context for 'flask shell'
from presentai import db, models
@app.shell_context_processor
def make_shell_context():
    return {
        'db': db,
        'User': models.User,
        'GeneratedImage': models.GeneratedImage,
     }

if __name__ == '__main__':
    # Use host='0.0.0.0' if you need external access
    app.run(port=5001, host='127.0.0.1')
