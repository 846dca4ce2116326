APP_NAME = "tol"
APP_AUTHOR = "tol"
LOG_FILENAME = "tol.log"
