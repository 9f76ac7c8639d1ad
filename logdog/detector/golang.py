"""
Go module support: detection, logger install and log discovery.
"""
import logging
import re
from pathlib import Path
from string import Template
from typing import List, Optional

from ..config.settings import LoggingConfig
from ..core.log_store import log_store
from .base import InstallError, InstallResult, Language

logger = logging.getLogger(__name__)

PACKAGE_FILE = Path("internal") / "logdog" / "logger.go"

MODULE_RE = re.compile(r'^\s*module\s+(\S+)', re.MULTILINE)

GO_LOGGER_TEMPLATE = Template('''\
// Code generated by logdog. Edit freely; reinstalling overwrites this file.
package logdog

import (
	"encoding/json"
	"fmt"
	"os"
	"path/filepath"
	"sort"
	"sync"
	"time"
)

const (
	projectName = "${project}"
	outputDir   = "${output_dir}"
	maxFiles    = ${max_files}
	dateFormat  = "${date_format}"
	minLevel    = "${log_level}"
)

var levelRank = map[string]int{"DEBUG": 0, "INFO": 1, "WARN": 2, "ERROR": 3}

type entry struct {
	Timestamp string         `json:"timestamp"`
	Level     string         `json:"level"`
	Message   string         `json:"message"`
	Data      map[string]any `json:"data,omitempty"`
}

var mu sync.Mutex

func Debug(msg string, data ...map[string]any) { write("DEBUG", msg, data) }
func Info(msg string, data ...map[string]any)  { write("INFO", msg, data) }
func Warn(msg string, data ...map[string]any)  { write("WARN", msg, data) }
func Error(msg string, data ...map[string]any) { write("ERROR", msg, data) }

func write(level, msg string, data []map[string]any) {
	if levelRank[level] < levelRank[minLevel] {
		return
	}
	e := entry{Timestamp: time.Now().Format(time.RFC3339), Level: level, Message: msg}
	if len(data) > 0 {
		e.Data = data[0]
	}
	line, err := json.Marshal(e)
	if err != nil {
		return
	}

	mu.Lock()
	defer mu.Unlock()
	name := fmt.Sprintf("logdog-%s.json", time.Now().Format(dateFormat))
	dirs := []string{outputDir}
	if home, err := os.UserHomeDir(); err == nil {
		dirs = append(dirs, filepath.Join(home, "logdog", projectName))
	}
	for _, dir := range dirs {
		if err := os.MkdirAll(dir, 0o755); err != nil {
			continue
		}
		appendLine(filepath.Join(dir, name), line)
		prune(dir)
	}
}

func appendLine(path string, line []byte) {
	f, err := os.OpenFile(path, os.O_APPEND|os.O_CREATE|os.O_WRONLY, 0o644)
	if err != nil {
		return
	}
	defer f.Close()
	f.Write(append(line, '\\n'))
}

func prune(dir string) {
	files, err := filepath.Glob(filepath.Join(dir, "logdog-*.json"))
	if err != nil || len(files) <= maxFiles {
		return
	}
	sort.Strings(files)
	for _, old := range files[:len(files)-maxFiles] {
		os.Remove(old)
	}
}
''')


class GoLanguage(Language):
    """Projects with a go.mod at their root."""

    def name(self) -> str:
        return "Go"

    def detect(self, project_path: Path) -> bool:
        return (Path(project_path) / "go.mod").is_file()

    def install(self, project_path: Path, config: LoggingConfig) -> InstallResult:
        project_path = Path(project_path)
        package_file = project_path / PACKAGE_FILE
        output_dir = project_path / config.output_dir
        overwritten = package_file.exists()

        source = GO_LOGGER_TEMPLATE.substitute(
            project=self._module_name(project_path),
            output_dir=config.output_dir,
            max_files=config.max_files,
            date_format=config.date_format,
            log_level=config.log_level,
        )

        try:
            package_file.parent.mkdir(parents=True, exist_ok=True)
            package_file.write_text(source, encoding='utf-8')
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InstallError(f"failed to install logger: {e}") from e

        if overwritten:
            logger.warning("Overwrote existing logger at %s", package_file)
        logger.info("Installed Go logger into %s", project_path)
        return InstallResult(package_file=package_file, output_dir=output_dir, overwritten=overwritten)

    def get_log_paths(self, project_path: Path, config: Optional[LoggingConfig] = None) -> List[str]:
        config = config or LoggingConfig()
        return log_store.list_logs(Path(project_path) / config.output_dir)

    def install_targets(self, config: LoggingConfig) -> List[str]:
        return [PACKAGE_FILE.as_posix(), config.output_dir.rstrip("/") + "/"]

    def _module_name(self, project_path: Path) -> str:
        """Last path element of the go.mod module, or the directory name."""
        try:
            match = MODULE_RE.search((project_path / "go.mod").read_text(encoding='utf-8'))
        except OSError:
            match = None
        if match:
            return match.group(1).rstrip("/").split("/")[-1]
        return project_path.name.lstrip(".")
