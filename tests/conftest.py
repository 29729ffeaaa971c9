"""Pytest configuration and fixtures."""

import pytest

SAMPLE_SIMPLE = '''
package com.example.demo;

import org.springframework.web.bind.annotation.*;

@RestController
@RequestMapping("/api")
public class HelloController {

    @GetMapping("/hi")
    public String hi() { return "hi"; }

    @GetMapping
    public String ping() {
        return "ok";
    }
}
'''

SAMPLE_NESTED = '''
@Controller
public class NestedController {

    @GetMapping("/check")
    public int check(boolean x) {
        if (x) { return 1; } else { return 2; }
    }

    @PostMapping("/after")
    public String after() {
        String s = "{";
        char c = '}';
        // }
        /* { */
        return s + c;
    }
}
'''

SAMPLE_MULTI = '''
package com.example.shop;

@RestController
@RequestMapping(value = "/users")
public class UserController extends BaseController implements Auditable {

    private final UserService service;

    @Autowired
    public UserController(UserService service) {
        this.service = service;
    }

    /**
     * @GetMapping("/javadoc") must not be picked up.
     */
    @GetMapping("/{id}")
    public User get(@PathVariable Long id) {
        return service.find(id);
    }

    @PutMapping(value = "/{id}", consumes = "application/json")
    public ResponseEntity<User> update(
            @PathVariable Long id,
            @RequestBody User user) {
        return ResponseEntity.ok(service.save(user));
    }

    @DeleteMapping("/{id}")
    @PreAuthorize("hasRole('ADMIN')")
    public void delete(@PathVariable Long id) throws NotFoundException {
        service.delete(id);
    }

    @PatchMapping(path = "/{id}/name")
    public User rename(@PathVariable Long id, @RequestParam String name) {
        return service.rename(id, name);
    }

    @RequestMapping(method = RequestMethod.HEAD)
    public void head() {
    }

    @PostMapping()
    public User create(@RequestBody User user) {
        return service.save(user);
    }
}

class UserMapper {
    @GetMapping("/not-a-controller")
    public String ignored() { return ""; }
}

@RestController
public final class HealthController {
    @GetMapping("/health")
    public String health() { return "UP"; }
}
'''

SAMPLE_NO_CONTROLLERS = '''
package com.example.demo;

@Service
public class PlainService {
    @Autowired
    private Repository repository;

    public String work() { return "done"; }
}
'''

SAMPLE_BROKEN_METHOD = '''
@RestController
public abstract class BrokenController {
    @GetMapping("/abstract")
    public abstract String missingBody();
}
'''

SAMPLE_GOOD = '''
@RestController
public class GoodController {
    @GetMapping("/good")
    public String good() { return "good"; }
}
'''


@pytest.fixture
def sample_simple():
    return SAMPLE_SIMPLE


@pytest.fixture
def sample_nested():
    return SAMPLE_NESTED


@pytest.fixture
def sample_multi():
    return SAMPLE_MULTI


@pytest.fixture
def sample_no_controllers():
    return SAMPLE_NO_CONTROLLERS


@pytest.fixture
def sample_broken_then_good():
    return SAMPLE_BROKEN_METHOD + SAMPLE_GOOD


@pytest.fixture
def sample_good():
    return SAMPLE_GOOD
